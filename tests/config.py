from libb import Setting

Setting.unlock()

postgres = Setting()
postgres.database='postgres'
postgres.index=1

mysql = Setting()
mysql.database='mysql'
mysql.index=1

sqlite = Setting()
sqlite.database='sqlite'
sqlite.index=1

mssql = Setting()
mssql.database='mssql'
mssql.index=1

Setting.lock()
