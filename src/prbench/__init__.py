__version__ = "0.1.0"

from .clients import GitHubClient, PublishRequest
from .config import PipelineConfig
from .events import TriggerEvent, load_event, should_run
from .pipeline import Pipeline, PipelineResult, PipelineState
from .report import ReportMessage, compose_report

__all__ = [
    "__version__",
    "GitHubClient",
    "PipelineConfig",
    "Pipeline",
    "PipelineResult",
    "PipelineState",
    "PublishRequest",
    "ReportMessage",
    "TriggerEvent",
    "compose_report",
    "load_event",
    "should_run",
]
