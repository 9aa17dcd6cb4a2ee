from collections.abc import Sequence
from dataclasses import dataclass, field

from loguru import logger

from oracle_slow_query_alert.domain import AlertTarget
from oracle_slow_query_alert.exceptions import NotificationError
from oracle_slow_query_alert.input import SlowSessionInput
from oracle_slow_query_alert.output import AlertOutput
from oracle_slow_query_alert.report import SlackMessageFormatter


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Outcome of one monitoring run."""

    targets: tuple[AlertTarget, ...] = field(default_factory=tuple)
    message: str | None = None
    delivered: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return sum(target.count for target in self.targets)


class SlowQueryPipeline:
    def __init__(
        self,
        inputs: Sequence[SlowSessionInput],
        outputs: Sequence[AlertOutput],
        formatter: SlackMessageFormatter | None = None,
    ) -> None:
        self._inputs = tuple(inputs)
        self._outputs = tuple(outputs)
        self._formatter = formatter or SlackMessageFormatter()

    async def run(self) -> PipelineResult:
        # Detection errors propagate; a partial observation is not reported.
        targets: list[AlertTarget] = []
        for source in self._inputs:
            targets.append(await source.fetch())

        result = PipelineResult(targets=tuple(targets))
        if result.total == 0:
            logger.info("No slow queries found")
            return result

        message = self._formatter.format(result.targets)
        delivered: list[str] = []
        for output in self._outputs:
            try:
                await output.send(message)
            except NotificationError as exc:
                logger.error("Alert delivery via {} failed: {}", output.name, exc)
                continue
            delivered.append(output.name)

        return PipelineResult(targets=result.targets, message=message, delivered=tuple(delivered))
