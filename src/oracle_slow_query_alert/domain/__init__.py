"""Domain models for slow session detection and alerting."""

from oracle_slow_query_alert.domain.models import (
    AlertTarget,
    SessionSnapshot,
    SlowSessionRecord,
    kill_session_command,
)
from oracle_slow_query_alert.domain.predicate import SlowSessionPredicate, select_slow_sessions

__all__ = [
    "AlertTarget",
    "SessionSnapshot",
    "SlowSessionPredicate",
    "SlowSessionRecord",
    "kill_session_command",
    "select_slow_sessions",
]
