"""
Pytest configuration and fixtures for rpg-resolver tests.
"""

import random
import sys
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing rpg_resolver
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from rpg_resolver.dice import DiceEngine  # noqa: E402
from rpg_resolver.models import Character, CharacterType, CoreStat  # noqa: E402


class ScriptedRandom(random.Random):
    """A Random whose randint() returns a fixed script of values in order."""

    def __init__(self, values):
        super().__init__(0)
        self._values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a, b):
        self.calls.append((a, b))
        if not self._values:
            raise AssertionError("ScriptedRandom ran out of values")
        value = self._values.pop(0)
        if not a <= value <= b:
            raise AssertionError(f"Scripted value {value} outside [{a}, {b}]")
        return value


@pytest.fixture
def scripted():
    """Factory for a DiceEngine that rolls exactly the given values in order."""
    def _make(*values: int) -> DiceEngine:
        return DiceEngine(ScriptedRandom(values))
    return _make


@pytest.fixture
def hero() -> Character:
    """A player character with a spread of stats."""
    return Character(
        name="Mara",
        type=CharacterType.PLAYER,
        health=12,
        stats={
            CoreStat.STRENGTH: 14,      # +2
            CoreStat.PERCEPTION: 12,    # +1
            CoreStat.ENDURANCE: 10,     # +0
            CoreStat.CHARISMA: 9,       # -1
            CoreStat.INTELLIGENCE: 16,  # +3
            CoreStat.AGILITY: 13,       # +1
            CoreStat.LUCK: 12,          # +1
        },
    )


@pytest.fixture
def brute() -> Character:
    """An enemy that is strong but clumsy."""
    return Character(
        name="Ogre",
        type=CharacterType.ENEMY,
        health=30,
        stats={
            CoreStat.STRENGTH: 20,      # +5
            CoreStat.PERCEPTION: 8,     # -1
            CoreStat.ENDURANCE: 18,     # +4
            CoreStat.CHARISMA: 4,       # -3
            CoreStat.INTELLIGENCE: 5,   # -3
            CoreStat.AGILITY: 6,        # -2
            CoreStat.LUCK: 10,          # +0
        },
    )
