from oracle_slow_query_alert.input.base import SlowSessionInput
from oracle_slow_query_alert.input.manual import ManualInput
from oracle_slow_query_alert.input.oracle import (
    DatabaseConfig,
    OracleSessionClient,
    OracleSlowSessionInput,
    SessionRowParser,
)

__all__ = [
    "SlowSessionInput",
    "ManualInput",
    "DatabaseConfig",
    "OracleSessionClient",
    "OracleSlowSessionInput",
    "SessionRowParser",
]
