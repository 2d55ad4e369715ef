from __future__ import annotations

from dataclasses import dataclass

from ...core import canon


@dataclass
class InsightConfig:
    # Morning = slots starting before this label; afternoon = the rest
    morning_end: str = canon.MIDDAY_LABEL

    # Historical daily average is only quoted with at least this many days
    min_history_days: int = 1


def default_config() -> InsightConfig:
    return InsightConfig()
