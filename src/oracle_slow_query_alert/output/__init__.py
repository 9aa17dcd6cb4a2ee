from oracle_slow_query_alert.output.base import AlertOutput
from oracle_slow_query_alert.output.console import ConsoleAlertOutput
from oracle_slow_query_alert.output.slack import SlackWebhookOutput

__all__ = ["AlertOutput", "ConsoleAlertOutput", "SlackWebhookOutput"]
