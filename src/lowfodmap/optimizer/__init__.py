"""Weekly plan optimization.

Draws each slot's meal from the user's preferred foods, then iteratively
rebalances portions so that no FODMAP type is overloaded and the meal lands
inside its calorie band.
"""

from __future__ import annotations

from lowfodmap.optimizer.models import (
    SLOT_CALORIE_SHARE,
    CalorieTarget,
    OptimizerSettings,
    RefinementOutcome,
    RefinementResult,
    SlotReport,
    WeeklyPlanResult,
)

__all__ = [
    "SLOT_CALORIE_SHARE",
    "CalorieTarget",
    "OptimizerSettings",
    "RefinementOutcome",
    "RefinementResult",
    "SlotReport",
    "WeeklyPlanResult",
]
