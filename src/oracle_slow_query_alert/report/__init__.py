from oracle_slow_query_alert.report.formatter import SlackMessageFormatter

__all__ = ["SlackMessageFormatter"]
