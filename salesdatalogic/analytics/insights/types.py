from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Protocol, Sequence, TYPE_CHECKING

from ...core.types import ComparisonSeries, DailySales

if TYPE_CHECKING:
    from .config import InsightConfig

InsightCategory = Literal["timing", "comparison", "mix", "history"]
InsightSeverity = Literal["info", "notice", "warning"]


@dataclass
class Insight:
    """One sentence about today's trading.

    ``message`` is display-ready; ``metrics`` carries the numbers behind it
    (amounts, percentages) and ``extras`` any non-numeric labels.
    """

    id: str
    category: InsightCategory
    title: str
    message: str
    severity: InsightSeverity = "info"
    metrics: Dict[str, float] = field(default_factory=dict)
    extras: Dict[str, Any] = field(default_factory=dict)


@dataclass
class InsightContext:
    """Inputs beyond today's series: the primary comparison and stored history."""

    comparison: Optional[ComparisonSeries] = None
    history: Sequence[DailySales] = ()


class InsightEvaluator(Protocol):
    def __call__(
        self,
        today: ComparisonSeries,
        *,
        config: "InsightConfig",
        context: InsightContext,
    ) -> Optional[Insight]: ...
