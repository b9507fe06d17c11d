"""
Per-target bonus tables.

The constants are fitted values with no underlying formula.
"""

from dataclasses import dataclass
from typing import Callable

from hash_predictor.core.exceptions import InvalidTargetError
from hash_predictor.models.schemas import HashAnalysis, Multiplier


@dataclass(frozen=True)
class RuleContext:
    """Inputs a bonus rule may inspect."""

    entropy: float
    score: int
    analysis: HashAnalysis

    @property
    def variance(self) -> float:
        return self.analysis.statistics.variance

    @property
    def checksum(self) -> int:
        return self.analysis.statistics.checksum


@dataclass(frozen=True)
class BonusRule:
    """An additive bonus applied when its predicate holds."""

    reason: str
    bonus: int
    applies: Callable[[RuleContext], bool]


@dataclass(frozen=True)
class TargetBonus:
    """Flat bonus for a target plus its conditional rules."""

    base: int
    rules: tuple[BonusRule, ...] = ()


TARGET_CONFIDENCE_RULES: dict[Multiplier, TargetBonus] = {
    Multiplier.X2: TargetBonus(
        base=8,
        rules=(
            BonusRule("entropy in (4.0, 4.3)", 7, lambda c: 4.0 < c.entropy < 4.3),
            BonusRule("score in [30, 60]", 5, lambda c: 30 <= c.score <= 60),
        ),
    ),
    Multiplier.X3: TargetBonus(
        base=7,
        rules=(
            BonusRule("entropy in (4.1, 4.4)", 8, lambda c: 4.1 < c.entropy < 4.4),
            BonusRule("score in [40, 70]", 6, lambda c: 40 <= c.score <= 70),
        ),
    ),
    Multiplier.X4: TargetBonus(
        base=5,
        rules=(
            BonusRule("entropy in (3.91, 3.97)", 12, lambda c: 3.91 < c.entropy < 3.97),
            BonusRule("score in [45, 80]", 10, lambda c: 45 <= c.score <= 80),
            BonusRule(
                "double repeat without triple repeat",
                8,
                lambda c: c.analysis.patterns.double_repeat
                and not c.analysis.patterns.triple_repeat,
            ),
        ),
    ),
    Multiplier.X7: TargetBonus(
        base=6,
        rules=(
            BonusRule("entropy in (4.1, 4.4)", 15, lambda c: 4.1 < c.entropy < 4.4),
            BonusRule("score in [55, 90]", 10, lambda c: 55 <= c.score <= 90),
            BonusRule("variance above 6.0", 8, lambda c: c.variance > 6.0),
        ),
    ),
    Multiplier.X10: TargetBonus(
        base=12,
        rules=(
            BonusRule("entropy in (4.25, 4.5)", 18, lambda c: 4.25 < c.entropy < 4.5),
            BonusRule("score in [60, 100]", 12, lambda c: 60 <= c.score <= 100),
            BonusRule(
                "tail or head run",
                10,
                lambda c: c.analysis.patterns.tail_pattern
                or c.analysis.patterns.head_pattern,
            ),
            BonusRule("checksum divisible by 100", 8, lambda c: c.checksum % 100 == 0),
        ),
    ),
    Multiplier.X100: TargetBonus(
        base=15,
        rules=(
            BonusRule("entropy above 4.4", 20, lambda c: c.entropy > 4.4),
            BonusRule(
                "triple and double repeat",
                15,
                lambda c: c.analysis.patterns.triple_repeat
                and c.analysis.patterns.double_repeat,
            ),
            BonusRule(
                "tail and head run",
                20,
                lambda c: c.analysis.patterns.tail_pattern
                and c.analysis.patterns.head_pattern,
            ),
            BonusRule("checksum divisible by 128", 15, lambda c: c.checksum % 128 == 0),
            BonusRule("score in [80, 120]", 10, lambda c: 80 <= c.score <= 120),
        ),
    ),
}

TARGET_DELAY_BONUS: dict[Multiplier, int] = {
    Multiplier.X2: 10,
    Multiplier.X3: 10,
    Multiplier.X4: 20,
    Multiplier.X7: 35,
    Multiplier.X10: 75,
    Multiplier.X100: 650,
}


def resolve_target(target: Multiplier | int | float | str) -> Multiplier:
    """
    Coerce a target given as enum, int, whole float or digit string.

    Raises:
        InvalidTargetError: If the value is not a supported multiplier
    """
    if isinstance(target, Multiplier):
        return target

    value = None
    if isinstance(target, int) and not isinstance(target, bool):
        value = target
    elif isinstance(target, float) and target.is_integer():
        value = int(target)
    elif isinstance(target, str) and target.strip().isdigit():
        value = int(target.strip())

    try:
        return Multiplier(value)
    except ValueError:
        raise InvalidTargetError(target, [m.value for m in Multiplier]) from None
