"""Data models for weekly plan optimization."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from lowfodmap.data.models import Meal, MealSlot, WeeklyPlan

# Share of the daily calorie goal assigned to each slot
SLOT_CALORIE_SHARE: dict[MealSlot, float] = {
    MealSlot.BREAKFAST: 0.25,
    MealSlot.LUNCH: 0.35,
    MealSlot.AFTERNOON_SNACK: 0.05,
    MealSlot.DINNER: 0.30,
    MealSlot.SNACKS: 0.05,
}

DEFAULT_DAILY_CALORIE_GOAL = 2000.0
DEFAULT_CALORIE_TOLERANCE = 0.15


@dataclass(frozen=True)
class CalorieTarget:
    """Calorie target for one slot with a symmetric tolerance band."""

    slot: MealSlot
    target: float
    tolerance: float = DEFAULT_CALORIE_TOLERANCE

    @property
    def low(self) -> float:
        return self.target * (1 - self.tolerance)

    @property
    def high(self) -> float:
        return self.target * (1 + self.tolerance)

    @classmethod
    def for_slot(
        cls,
        slot: MealSlot,
        daily_goal: float,
        tolerance: float = DEFAULT_CALORIE_TOLERANCE,
    ) -> CalorieTarget:
        return cls(slot=slot, target=daily_goal * SLOT_CALORIE_SHARE[slot], tolerance=tolerance)


@dataclass
class OptimizerSettings:
    """Tuning for the refinement loop.

    Attributes:
        max_iterations: Hard cap on refinement iterations per slot
        calorie_tolerance: Half-width of the calorie band, as a fraction
        reduction_step: Fraction removed from the worst contributor per overload step
        overload_threshold: Load above which a FODMAP type is overloaded
        round_each_step: Round portions to integers after every step instead
            of only when the meal is committed
    """

    max_iterations: int = 50
    calorie_tolerance: float = DEFAULT_CALORIE_TOLERANCE
    reduction_step: float = 0.10
    overload_threshold: float = 1.0
    round_each_step: bool = False


class RefinementOutcome(Enum):
    """Why the refinement loop stopped."""

    CONVERGED = "converged"  # within the calorie band, no overload
    BUDGET_EXHAUSTED = "budget_exhausted"  # max_iterations reached
    NON_FINITE_RATIO = "non_finite_ratio"  # under-calorie scale could not be computed
    NO_CONTRIBUTOR = "no_contributor"  # overload reported but no item to reduce
    EMPTY = "empty"  # no items left in the meal


@dataclass
class RefinementResult:
    """Result of refining one slot's meal.

    Attributes:
        meal: Committed meal (integer portions, no empty items)
        iterations: Number of loop iterations evaluated
        outcome: Why the loop stopped
        total_calories: Calories of the committed meal
        fodmap_loads: Load per FODMAP type of the committed meal
    """

    meal: Meal
    iterations: int
    outcome: RefinementOutcome
    total_calories: float = 0.0
    fodmap_loads: dict = field(default_factory=dict)

    @property
    def converged(self) -> bool:
        return self.outcome == RefinementOutcome.CONVERGED


@dataclass
class SlotReport:
    """Refinement summary for one planned (day, slot)."""

    day: str
    slot: MealSlot
    target: CalorieTarget
    result: RefinementResult


@dataclass
class WeeklyPlanResult:
    """A generated weekly plan with per-slot refinement reports."""

    plan: WeeklyPlan
    reports: list[SlotReport] = field(default_factory=list)

    @property
    def unconverged(self) -> list[SlotReport]:
        return [r for r in self.reports if not r.result.converged]
