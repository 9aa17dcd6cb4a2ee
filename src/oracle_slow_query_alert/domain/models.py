"""Core domain models for slow session detection and alerting."""

from dataclasses import dataclass, field
from datetime import datetime

KILL_SESSION_TEMPLATE = "ALTER SYSTEM KILL SESSION '{sid},{serial}' IMMEDIATE;"


def kill_session_command(session_id: str, serial_number: str) -> str:
    """Build the statement that terminates exactly one session instance.

    Only the sid/serial# pair is interpolated; session metadata such as
    program or machine never reaches the statement.
    """
    return KILL_SESSION_TEMPLATE.format(sid=session_id, serial=serial_number)


@dataclass(frozen=True, slots=True)
class SlowSessionRecord:
    """A database session running a statement for too long or waiting too long."""

    session_id: str
    serial_number: str
    username: str | None
    client_machine: str | None
    client_program: str | None
    sql_id: str
    sql_text: str
    wait_event: str | None
    wait_class: str | None
    seconds_in_wait: int
    minutes_running: float
    status: str
    termination_command: str

    def __post_init__(self) -> None:
        if self.seconds_in_wait < 0:
            raise ValueError(f"seconds_in_wait must be non-negative, got {self.seconds_in_wait}")
        if self.minutes_running < 0:
            raise ValueError(f"minutes_running must be non-negative, got {self.minutes_running}")
        expected = kill_session_command(self.session_id, self.serial_number)
        if self.termination_command != expected:
            raise ValueError(
                f"termination_command does not target session "
                f"{self.session_id},{self.serial_number}: {self.termination_command!r}"
            )

    @classmethod
    def create(
        cls,
        session_id: str,
        serial_number: str,
        sql_id: str,
        sql_text: str,
        minutes_running: float,
        *,
        username: str | None = None,
        client_machine: str | None = None,
        client_program: str | None = None,
        wait_event: str | None = None,
        wait_class: str | None = None,
        seconds_in_wait: int = 0,
        status: str = "ACTIVE",
    ) -> "SlowSessionRecord":
        """Build a record, deriving the termination command from sid and serial#."""
        return cls(
            session_id=session_id,
            serial_number=serial_number,
            username=username,
            client_machine=client_machine,
            client_program=client_program,
            sql_id=sql_id,
            sql_text=sql_text,
            wait_event=wait_event,
            wait_class=wait_class,
            seconds_in_wait=seconds_in_wait,
            minutes_running=minutes_running,
            status=status,
            termination_command=kill_session_command(session_id, serial_number),
        )


@dataclass(frozen=True, slots=True)
class AlertTarget:
    """A monitored database and the slow sessions found on it."""

    label: str
    records: tuple[SlowSessionRecord, ...] = field(default_factory=tuple)

    @property
    def count(self) -> int:
        return len(self.records)


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """One session as seen in v$session, joined to its statement text.

    sql_text is None when the statement could not be resolved in v$sqlarea.
    """

    session_id: str
    serial_number: str
    session_type: str
    status: str
    sql_exec_start: datetime | None
    seconds_in_wait: int
    sql_id: str | None = None
    sql_text: str | None = None
    username: str | None = None
    client_machine: str | None = None
    client_program: str | None = None
    wait_event: str | None = None
    wait_class: str | None = None

    def elapsed_minutes(self, now: datetime) -> float | None:
        if self.sql_exec_start is None:
            return None
        return (now - self.sql_exec_start).total_seconds() / 60
