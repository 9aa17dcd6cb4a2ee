"""The slow/blocked session predicate, in SQL and in Python."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from oracle_slow_query_alert.domain.models import SessionSnapshot, SlowSessionRecord


@dataclass(frozen=True, slots=True)
class SlowSessionPredicate:
    """Thresholds deciding which sessions count as slow or blocked.

    A session qualifies when it is an ACTIVE user session with a recorded
    statement start time and it has either been running the statement for at
    least ``min_elapsed_minutes`` or has been waiting for more than
    ``min_wait_seconds``.
    """

    min_elapsed_minutes: int = 30
    min_wait_seconds: int = 300

    def __post_init__(self) -> None:
        for name in ("min_elapsed_minutes", "min_wait_seconds"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    def where_clause(self, alias: str = "s") -> str:
        """Render the predicate as an Oracle WHERE clause body against v$session."""
        return (
            f"{alias}.type = 'USER'\n"
            f"            AND {alias}.status = 'ACTIVE'\n"
            f"            AND {alias}.sql_exec_start IS NOT NULL\n"
            f"            AND (\n"
            f"                (SYSDATE - {alias}.sql_exec_start) * 24 * 60 >= {self.min_elapsed_minutes:d}\n"
            f"                OR {alias}.seconds_in_wait > {self.min_wait_seconds:d}\n"
            f"            )"
        )

    def matches(self, snapshot: SessionSnapshot, now: datetime) -> bool:
        if snapshot.session_type != "USER" or snapshot.status != "ACTIVE":
            return False

        elapsed = snapshot.elapsed_minutes(now)
        if elapsed is None:
            return False

        return elapsed >= self.min_elapsed_minutes or snapshot.seconds_in_wait > self.min_wait_seconds


def select_slow_sessions(
    snapshots: Iterable[SessionSnapshot],
    now: datetime,
    predicate: SlowSessionPredicate | None = None,
) -> list[SlowSessionRecord]:
    """Evaluate the detection query in memory.

    Mirrors what the database does for the detection query: filter by the
    predicate, drop sessions whose statement text is unresolved (inner join),
    round the running time and order longest-running first.
    """
    predicate = predicate or SlowSessionPredicate()
    records: list[SlowSessionRecord] = []

    for snapshot in snapshots:
        if not predicate.matches(snapshot, now):
            continue
        if snapshot.sql_id is None or snapshot.sql_text is None:
            continue

        elapsed = snapshot.elapsed_minutes(now)
        records.append(
            SlowSessionRecord.create(
                session_id=snapshot.session_id,
                serial_number=snapshot.serial_number,
                sql_id=snapshot.sql_id,
                sql_text=snapshot.sql_text,
                minutes_running=round(max(elapsed or 0.0, 0.0), 2),
                username=snapshot.username,
                client_machine=snapshot.client_machine,
                client_program=snapshot.client_program,
                wait_event=snapshot.wait_event,
                wait_class=snapshot.wait_class,
                seconds_in_wait=snapshot.seconds_in_wait,
                status=snapshot.status,
            )
        )

    records.sort(key=lambda record: record.minutes_running, reverse=True)
    return records
