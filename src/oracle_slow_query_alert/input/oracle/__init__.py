from oracle_slow_query_alert.input.oracle.adapter import OracleSlowSessionInput
from oracle_slow_query_alert.input.oracle.client import DatabaseConfig, OracleSessionClient
from oracle_slow_query_alert.input.oracle.parser import SessionRowParser

__all__ = ["OracleSlowSessionInput", "OracleSessionClient", "DatabaseConfig", "SessionRowParser"]
