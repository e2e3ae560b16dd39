import importlib


def test_circular_dependencies():
    """Test if modules can be imported without circular dependencies"""
    # List of all modules to test in dependency order
    modules = [
        # Independent modules (no internal deps)
        'sqlclause.exceptions',
        'sqlclause.cache',
        'sqlclause.index',
        'sqlclause.template',

        # Dialects (self-contained registry)
        'sqlclause.dialect.base',
        'sqlclause.dialect.postgres',
        'sqlclause.dialect.mysql',
        'sqlclause.dialect.sqlite',
        'sqlclause.dialect.mssql',
        'sqlclause.dialect',

        # Directive model and options
        'sqlclause.directives',
        'sqlclause.options',
        'sqlclause.schema',

        # Resolution and rendering
        'sqlclause.resolve',
        'sqlclause.generators',
        'sqlclause.binding',

        # Main package
        'sqlclause',
    ]

    results = {}
    for module in modules:
        print(f'Checking {module}... ', end='')
        try:
            importlib.import_module(module)
            print('ok')
            results[module] = True
        except ImportError as e:
            print(f'failed: {e}')
            results[module] = False

    success = sum(1 for v in results.values() if v)
    total = len(results)
    print(f'\nSummary: {success}/{total} modules imported successfully')

    failures = [m for m, v in results.items() if not v]
    assert success == total, f'{len(failures)} modules failed circular dependency check: {failures}'


if __name__ == '__main__':
    __import__('pytest').main([__file__])
