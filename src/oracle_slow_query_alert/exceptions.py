class SlowQueryAlertError(Exception):
    pass


class ConfigurationError(SlowQueryAlertError):
    pass


class DetectionError(SlowQueryAlertError):
    """Detection could not observe a target; fatal for the run."""

    def __init__(self, message: str, target: str | None = None) -> None:
        super().__init__(message)
        self.target = target


class DatabaseConnectionError(DetectionError):
    pass


class QueryExecutionError(DetectionError):
    pass


class RowDecodeError(SlowQueryAlertError):
    def __init__(self, message: str, row_number: int | None = None) -> None:
        super().__init__(message)
        self.row_number = row_number


class NotificationError(SlowQueryAlertError):
    """The alert could not be handed to an output; recoverable."""


class SerializationError(NotificationError):
    pass


class DeliveryError(NotificationError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
