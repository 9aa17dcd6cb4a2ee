class ConsoleAlertOutput:
    """Console output adapter, prints the alert message instead of posting it."""

    def __init__(self, prefix: str = "[ALERT]") -> None:
        self._prefix = prefix

    @property
    def name(self) -> str:
        return "console"

    async def send(self, message: str) -> None:
        print(self._prefix)
        print(message, end="" if message.endswith("\n") else "\n")
