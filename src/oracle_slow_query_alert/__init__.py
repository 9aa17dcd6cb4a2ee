__version__ = "0.1.0"

from oracle_slow_query_alert.core import PipelineResult, SlowQueryPipeline
from oracle_slow_query_alert.domain import (
    AlertTarget,
    SessionSnapshot,
    SlowSessionPredicate,
    SlowSessionRecord,
    kill_session_command,
    select_slow_sessions,
)
from oracle_slow_query_alert.input import (
    DatabaseConfig,
    ManualInput,
    OracleSessionClient,
    OracleSlowSessionInput,
    SlowSessionInput,
)
from oracle_slow_query_alert.output import AlertOutput, ConsoleAlertOutput, SlackWebhookOutput
from oracle_slow_query_alert.report import SlackMessageFormatter

__all__ = [
    "__version__",
    "SlowQueryPipeline",
    "PipelineResult",
    "SlowSessionRecord",
    "AlertTarget",
    "SessionSnapshot",
    "SlowSessionPredicate",
    "kill_session_command",
    "select_slow_sessions",
    "SlowSessionInput",
    "ManualInput",
    "DatabaseConfig",
    "OracleSessionClient",
    "OracleSlowSessionInput",
    "SlackMessageFormatter",
    "AlertOutput",
    "ConsoleAlertOutput",
    "SlackWebhookOutput",
]
