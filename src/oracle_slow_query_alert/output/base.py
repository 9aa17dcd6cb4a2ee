from typing import Protocol, runtime_checkable


@runtime_checkable
class AlertOutput(Protocol):
    """Protocol for alert message destinations."""

    @property
    def name(self) -> str:
        ...

    async def send(self, message: str) -> None:
        ...
