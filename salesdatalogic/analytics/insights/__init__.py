from __future__ import annotations

from .types import (
    Insight,
    InsightCategory,
    InsightSeverity,
    InsightContext,
)
from .config import InsightConfig, default_config
from .engine import generate_insights, insight_messages

__all__ = [
    "Insight",
    "InsightCategory",
    "InsightSeverity",
    "InsightConfig",
    "InsightContext",
    "default_config",
    "generate_insights",
    "insight_messages",
]
