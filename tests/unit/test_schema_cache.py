"""
Unit tests for described-schema cache utilities.
"""
from dataclasses import dataclass

from sqlclause.cache import Cache, cacheable_schema
from sqlclause.schema import describe


def test_cache_singleton():
    """Test that Cache is a singleton"""
    cache1 = Cache.get_instance()
    cache2 = Cache.get_instance()
    assert cache1 is cache2


def test_cache_operations():
    """Test named cache get/set operations"""
    cache = Cache.get_instance()

    named = cache.get_cache('test_cache')
    named['key'] = 'value'
    assert 'key' in named
    assert cache.get_cache('test_cache') is named

    cache.clear_all()

    named = cache.get_cache('test_cache')
    assert 'key' not in named


def test_clear_named_cache():
    """Test clearing one cache leaves the others alone"""
    cache = Cache.get_instance()
    cache.get_cache('first')['a'] = 1
    cache.get_cache('second')['b'] = 2

    cache.clear_cache('first')

    assert 'a' not in cache.get_cache('first')
    assert 'b' in cache.get_cache('second')


def test_clear_for_type(user_record, insert_record):
    """Test clearing cache entries for a specific record type"""
    cache = Cache.get_instance()
    describe(user_record)
    describe(insert_record)

    described = cache.get_cache('described_schemas')
    assert user_record in described
    assert insert_record in described

    cache.clear_for_type(user_record)

    assert user_record not in described
    assert insert_record in described


def test_cacheable_schema_decorator():
    """Test results are cached per type and bypass skips the cache"""
    calls = []

    @cacheable_schema('decorator_test', maxsize=2)
    def build(record_type):
        calls.append(record_type)
        return object()

    @dataclass
    class A:
        x: int = 0

    first = build(A)
    assert build(A) is first
    assert len(calls) == 1

    assert build(A, bypass_cache=True) is not first
    assert len(calls) == 2


def test_lru_bound():
    """Test the cache evicts least recently used types"""
    @cacheable_schema('bounded_test', maxsize=2)
    def build(record_type):
        return record_type.__name__

    types = [type(f'T{i}', (), {}) for i in range(3)]
    for t in types:
        build(t)

    bounded = Cache.get_instance().get_cache('bounded_test')
    assert len(bounded) == 2
    assert types[0] not in bounded


if __name__ == '__main__':
    __import__('pytest').main([__file__])
