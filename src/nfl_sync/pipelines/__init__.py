from .base import PipelineRun
from .odds import AlternateLinesRun
from .pbp import PlayByPlayRun

PIPELINES = {
    "pbp": PlayByPlayRun,
    "odds": AlternateLinesRun,
}

__all__ = ["PIPELINES", "AlternateLinesRun", "PipelineRun", "PlayByPlayRun"]
