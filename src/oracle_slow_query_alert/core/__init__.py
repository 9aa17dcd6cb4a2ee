from oracle_slow_query_alert.core.pipeline import PipelineResult, SlowQueryPipeline

__all__ = ["PipelineResult", "SlowQueryPipeline"]
