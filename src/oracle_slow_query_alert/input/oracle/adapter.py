from collections.abc import Sequence
from typing import Any

from loguru import logger

from oracle_slow_query_alert.domain import AlertTarget, SlowSessionRecord
from oracle_slow_query_alert.exceptions import RowDecodeError
from oracle_slow_query_alert.input.oracle.client import OracleSessionClient
from oracle_slow_query_alert.input.oracle.parser import SessionRowParser


class OracleSlowSessionInput:
    """SlowSessionInput adapter for one Oracle database.

    Runs the detection query through OracleSessionClient and decodes the
    rows into SlowSessionRecord objects, keeping the query's order.

    Usage:
        client = OracleSessionClient(config, label="primary")
        source = OracleSlowSessionInput(client)
        target = await source.fetch()

    A row that cannot be decoded is logged and skipped. Connection and query
    failures propagate to the caller.

    For testing, inject rows via the from_rows() class method.
    """

    def __init__(
        self,
        client: OracleSessionClient,
        parser: SessionRowParser | None = None,
        label: str | None = None,
    ) -> None:
        self._client = client
        self._parser = parser or SessionRowParser()
        self._label = label or client.label
        self._rows: list[Sequence[Any]] | None = None

    @classmethod
    def from_rows(
        cls,
        label: str,
        rows: list[Sequence[Any]],
        parser: SessionRowParser | None = None,
    ) -> "OracleSlowSessionInput":
        """Create adapter from pre-fetched rows (for testing).

        This bypasses the database client and decodes the provided rows.
        """
        instance = cls.__new__(cls)
        instance._client = None  # type: ignore[assignment]
        instance._parser = parser or SessionRowParser()
        instance._label = label
        instance._rows = list(rows)
        return instance

    @property
    def label(self) -> str:
        return self._label

    async def fetch(self) -> AlertTarget:
        if self._rows is not None:
            rows = self._rows
        else:
            rows = await self._client.fetch_rows()

        records = self._parse_rows(rows)
        logger.info("{}: {} slow session(s) found", self._label, len(records))
        return AlertTarget(label=self._label, records=tuple(records))

    def _parse_rows(self, rows: Sequence[Sequence[Any]]) -> list[SlowSessionRecord]:
        records: list[SlowSessionRecord] = []

        for row_number, row in enumerate(rows, start=1):
            try:
                record = self._parser.parse_row(row, row_number=row_number)
            except RowDecodeError as exc:
                logger.warning("{}: skipping row {}: {}", self._label, row_number, exc)
                continue
            records.append(record)

        return records
