from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ...core.types import ComparisonSeries, DailySales
from .config import InsightConfig, default_config
from .evaluators import (
    comparison_delta,
    historical_average,
    morning_afternoon_split,
    peak_time,
)
from .types import Insight, InsightContext, InsightEvaluator

logger = logging.getLogger(__name__)

# display order
EVALUATORS: List[InsightEvaluator] = [
    peak_time,
    comparison_delta,
    morning_afternoon_split,
    historical_average,
]


def generate_insights(
    today: ComparisonSeries,
    comparison: Optional[ComparisonSeries] = None,
    *,
    history: Sequence[DailySales] = (),
    config: Optional[InsightConfig] = None,
) -> List[Insight]:
    """Run every evaluator against today's series.

    Evaluators return None when they have nothing to say. One that raises is
    logged with its traceback and skipped; the others still run.
    """
    cfg = config or default_config()
    context = InsightContext(comparison=comparison, history=history)

    found: List[Insight] = []
    for ev in EVALUATORS:
        name = getattr(ev, "__name__", repr(ev))
        try:
            insight = ev(today, config=cfg, context=context)
        except Exception:
            logger.exception("Insight evaluator %s failed", name)
            continue
        if insight is not None:
            found.append(insight)
    logger.debug("Generated %d insight(s)", len(found))
    return found


def insight_messages(insights: Iterable[Insight]) -> List[str]:
    return [i.message for i in insights]
