"""
Dice notation parsing and rolling.

Notation is ``[count]d<sides>[+/-modifier]`` with whitespace ignored, e.g.
``d20``, ``3d6+2``, ``1d8-1``. Only d4, d6, d8, d10, d12, d20 and d100 are
supported.

Randomness always comes from an explicit generator held by a
:class:`DiceEngine`. Pass a seeded ``random.Random`` for reproducible
rolls; the default is a ``random.SystemRandom``, which is safe to share
across threads.
"""

from __future__ import annotations

import logging
import random
import re

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .exceptions import InvalidNotationError, UnsupportedDieError

logger = logging.getLogger("rpg-resolver.dice")

SUPPORTED_DICE = frozenset({4, 6, 8, 10, 12, 20, 100})

# Upper bound on dice per expression; larger pools are rejected before rolling
MAX_DICE_COUNT = 100

_NOTATION_RE = re.compile(r"^(\d*)d(\d+)([+-]\d+)?$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class DiceNotation(BaseModel):
    """A parsed dice expression."""
    model_config = ConfigDict(frozen=True)

    count: int = Field(default=1, ge=1, le=MAX_DICE_COUNT, description="Number of dice to roll")
    sides: int = Field(description="Sides per die")
    modifier: int = Field(default=0, description="Flat modifier added to the sum")

    @model_validator(mode="after")
    def check_sides(self) -> "DiceNotation":
        if self.sides not in SUPPORTED_DICE:
            raise ValueError(f"Unsupported die: d{self.sides}")
        return self

    def __str__(self) -> str:
        text = f"{self.count}d{self.sides}"
        if self.modifier:
            text += f"{self.modifier:+d}"
        return text


class DiceRollResult(BaseModel):
    """A roll that keeps every individual die."""
    model_config = ConfigDict(frozen=True)

    notation: str
    rolls: list[int]
    modifier: int = 0
    total: int


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_notation(notation: str) -> DiceNotation:
    """Parse dice notation like '2d6+3'.

    Args:
        notation: Dice notation string (e.g., 'd20', '2d6+3', '1d8 - 1').

    Returns:
        The parsed DiceNotation.

    Raises:
        InvalidNotationError: If the notation does not match the grammar
            or asks for fewer than 1 or more than MAX_DICE_COUNT dice.
        UnsupportedDieError: If the die size is not supported.
    """
    if not isinstance(notation, str):
        raise InvalidNotationError(str(notation))
    compact = re.sub(r"\s+", "", notation)
    m = _NOTATION_RE.match(compact)
    if not m:
        raise InvalidNotationError(notation)

    try:
        count = int(m.group(1) or 1)
        sides = int(m.group(2))
        modifier = int(m.group(3) or 0)
    except ValueError as e:
        # int() refuses digit strings past the interpreter's conversion limit
        raise InvalidNotationError(notation, {"reason": str(e)}) from e

    if count < 1:
        raise InvalidNotationError(notation, {"reason": "dice count must be at least 1"})
    if count > MAX_DICE_COUNT:
        raise InvalidNotationError(
            notation, {"reason": f"dice count must be at most {MAX_DICE_COUNT}"}
        )
    if sides not in SUPPORTED_DICE:
        raise UnsupportedDieError(sides, {"notation": notation})

    return DiceNotation(count=count, sides=sides, modifier=modifier)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class DiceEngine:
    """Roll dice from notation using an injected random generator."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.SystemRandom()

    def _draw(self, parsed: DiceNotation) -> list[int]:
        return [self.rng.randint(1, parsed.sides) for _ in range(parsed.count)]

    def roll(self, notation: str) -> int:
        """Roll dice notation and return the total (no clamping)."""
        return self.roll_detailed(notation).total

    def roll_detailed(self, notation: str) -> DiceRollResult:
        """Roll dice notation and keep each individual die result."""
        parsed = parse_notation(notation)
        rolls = self._draw(parsed)
        total = sum(rolls) + parsed.modifier
        logger.debug(f"🎲 {parsed} -> {rolls} {parsed.modifier:+d} = {total}")
        return DiceRollResult(
            notation=str(parsed),
            rolls=rolls,
            modifier=parsed.modifier,
            total=total,
        )

    def roll_multiple(self, notation: str, count: int) -> list[int]:
        """Roll the same notation ``count`` independent times.

        This is batch simulation, not a dice pool: '2d6' rolled 3 times
        returns three 2d6 totals.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        parse_notation(notation)
        return [self.roll(notation) for _ in range(count)]

    def roll_d20(self) -> int:
        return self.roll("d20")

    def roll_percentile(self) -> int:
        return self.roll("d100")


_default_engine = DiceEngine()


def get_default_engine() -> DiceEngine:
    """Return the process-wide engine backed by ``random.SystemRandom``."""
    return _default_engine


def roll_dice(notation: str, rng: random.Random | None = None) -> int:
    """Roll dice notation with the given generator (or the default engine)."""
    engine = DiceEngine(rng) if rng is not None else _default_engine
    return engine.roll(notation)


def roll_multiple(notation: str, count: int, rng: random.Random | None = None) -> list[int]:
    """Roll the same notation ``count`` times and return every total."""
    engine = DiceEngine(rng) if rng is not None else _default_engine
    return engine.roll_multiple(notation, count)
