import pytest
from loguru import logger


@pytest.fixture
def log_records() -> list[tuple[str, str]]:
    """Capture (level, message) pairs emitted through loguru during a test."""
    records: list[tuple[str, str]] = []
    handler_id = logger.add(
        lambda message: records.append(
            (message.record["level"].name, message.record["message"])
        ),
        level="DEBUG",
        format="{message}",
    )
    yield records
    logger.remove(handler_id)
