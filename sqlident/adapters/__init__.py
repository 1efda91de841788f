from sqlident.adapters.dbapi import DBAPICursor, DBAPIDriver, DBAPIResult, DBAPIStatement

__all__ = ("DBAPICursor", "DBAPIDriver", "DBAPIResult", "DBAPIStatement")
