import re
from collections.abc import Sequence

from oracle_slow_query_alert.domain import AlertTarget, SlowSessionRecord

ZERO_WIDTH_SPACE = "\u200b"

_ADJACENT_BACKTICK = re.compile(r"`(?=`)")


class SlackMessageFormatter:
    """Renders slow sessions as a Slack mrkdwn message.

    Each non-empty target contributes a header line followed by one quoted
    block per session, in the order the records were found. Statement text
    and the kill command go in code blocks so their whitespace survives.
    Targets without sessions contribute nothing.

    Every interpolated value is escaped for Slack (`&`, `<`, `>`), so session
    metadata cannot produce mentions or links.
    """

    MISSING = "-"

    def format(self, targets: Sequence[AlertTarget]) -> str:
        return "".join(self.format_target(target) for target in targets)

    def format_target(self, target: AlertTarget) -> str:
        if not target.records:
            return ""

        label = self.escape(target.label)
        lines = [f"*Slow queries detected on {label}*\n", "\n"]
        for record in target.records:
            lines.append(self._format_record(record, label))
            lines.append("\n")
        return "".join(lines)

    def _format_record(self, record: SlowSessionRecord, label: str) -> str:
        return (
            f"> *User:* {self._text(record.username)}, "
            f"*Machine:* {self._text(record.client_machine)}, "
            f"*Program:* {self._text(record.client_program)}, "
            f"*Running:* {record.minutes_running:.2f} min\n"
            f"> *SQL ID:* {self.escape(record.sql_id)}\n"
            f"> *SQL:* ```{self._code(record.sql_text)}```\n"
            f"> *Kill command (run on {label}):* ```{self._code(record.termination_command)}```\n"
        )

    def _text(self, value: str | None) -> str:
        return self.escape(value) if value else self.MISSING

    def _code(self, value: str) -> str:
        # No backtick may touch another one or the fence, or the block closes early.
        text = _ADJACENT_BACKTICK.sub("`" + ZERO_WIDTH_SPACE, self.escape(value))
        if text.startswith("`"):
            text = ZERO_WIDTH_SPACE + text
        if text.endswith("`"):
            text += ZERO_WIDTH_SPACE
        return text

    @staticmethod
    def escape(value: str) -> str:
        return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
