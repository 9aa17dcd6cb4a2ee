from typing import Protocol, runtime_checkable

from oracle_slow_query_alert.domain import AlertTarget


@runtime_checkable
class SlowSessionInput(Protocol):
    """Protocol for sources of slow sessions, one per monitored target."""

    @property
    def label(self) -> str:
        ...

    async def fetch(self) -> AlertTarget:
        ...
