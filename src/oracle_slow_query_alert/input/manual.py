from typing import Sequence

from oracle_slow_query_alert.domain import AlertTarget, SlowSessionRecord


class ManualInput:
    """Manual input source for programmatically feeding slow sessions."""

    def __init__(self, label: str, records: Sequence[SlowSessionRecord]) -> None:
        self._label = label
        self._records: tuple[SlowSessionRecord, ...] = tuple(records)
        self.fetch_count: int = 0

    @property
    def label(self) -> str:
        return self._label

    async def fetch(self) -> AlertTarget:
        self.fetch_count += 1
        return AlertTarget(label=self._label, records=self._records)
