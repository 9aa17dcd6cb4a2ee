from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from oracle_slow_query_alert.domain import SlowSessionRecord
from oracle_slow_query_alert.exceptions import RowDecodeError

EXPECTED_COLUMNS = 13


class SessionRowParser:
    """Maps rows of the slow session query onto SlowSessionRecord."""

    def parse_row(self, row: Sequence[Any], row_number: int | None = None) -> SlowSessionRecord:
        """Decode one result row.

        Raises RowDecodeError when the row does not have the expected shape or
        its values cannot be converted.
        """
        if len(row) != EXPECTED_COLUMNS:
            raise RowDecodeError(
                f"expected {EXPECTED_COLUMNS} columns, got {len(row)}", row_number=row_number
            )

        (
            sid,
            serial,
            username,
            machine,
            program,
            sql_id,
            sql_text,
            event,
            wait_class,
            seconds_in_wait,
            minutes_running,
            status,
            kill_session_sql,
        ) = row

        try:
            return SlowSessionRecord(
                session_id=self._required_text(sid, "sid"),
                serial_number=self._required_text(serial, "serial#"),
                username=self._optional_text(username),
                client_machine=self._optional_text(machine),
                client_program=self._optional_text(program),
                sql_id=self._required_text(sql_id, "sql_id"),
                sql_text=self._statement_text(sql_text),
                wait_event=self._optional_text(event),
                wait_class=self._optional_text(wait_class),
                seconds_in_wait=self._to_int(seconds_in_wait, "seconds_in_wait"),
                minutes_running=self._to_float(minutes_running, "minutes_running"),
                status=self._required_text(status, "status"),
                termination_command=self._required_text(kill_session_sql, "kill_session_sql"),
            )
        except (TypeError, ValueError) as exc:
            raise RowDecodeError(str(exc), row_number=row_number) from exc

    def _required_text(self, value: Any, column: str) -> str:
        if value is None or value == "":
            raise ValueError(f"column {column} is empty")
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return str(value)

    def _optional_text(self, value: Any) -> str | None:
        if value is None:
            return None
        return str(value)

    def _statement_text(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        raise TypeError(f"sql_text has unsupported type {type(value).__name__}")

    def _to_int(self, value: Any, column: str) -> int:
        if value is None or isinstance(value, bool):
            raise ValueError(f"column {column} is not an integer: {value!r}")
        if isinstance(value, float | Decimal):
            if value != int(value):
                raise ValueError(f"column {column} is not an integer: {value!r}")
            return int(value)
        return int(value)

    def _to_float(self, value: Any, column: str) -> float:
        if value is None or isinstance(value, bool):
            raise ValueError(f"column {column} is not a number: {value!r}")
        return round(float(value), 2)
