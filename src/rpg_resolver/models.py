"""
Data models for the rpg-resolver engine.

Characters are externally owned records; everything else here is an
immutable value produced per call and safe to dump to JSON.
"""

from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from shortuuid import random

from .exceptions import InvalidLikelihoodError


class CoreStat(str, Enum):
    """The seven core attributes of a character."""
    STRENGTH = "Strength"
    PERCEPTION = "Perception"
    ENDURANCE = "Endurance"
    CHARISMA = "Charisma"
    INTELLIGENCE = "Intelligence"
    AGILITY = "Agility"
    LUCK = "Luck"


class CharacterType(str, Enum):
    PLAYER = "Player"
    NPC = "NPC"
    ENEMY = "Enemy"
    EVENT = "Event"


class Character(BaseModel):
    """A character sheet as seen by the engine.

    Stat values are deliberately loose: the modifier calculator treats a
    missing or non-numeric value as 10, so a partially filled sheet (an
    Event, say) still resolves. Use ``validation.validate_character`` to
    report on sheets that break the 1-20 range.
    """
    id: str = Field(default_factory=lambda: random(length=8))
    name: str
    type: CharacterType = CharacterType.PLAYER
    description: str | None = None
    stats: dict[CoreStat, Any] = Field(default_factory=dict)
    health: int | None = None
    mana: int | None = None
    skills: list[str] = Field(default_factory=list)
    abilities: list[str] = Field(default_factory=list)
    inventory: list[str] = Field(default_factory=list)
    notes: str | None = None
    role: str | None = None
    affiliation: str | None = None


class DifficultyClass(IntEnum):
    """Standard difficulty classes for checks against a fixed target."""
    VERY_EASY = 5
    EASY = 10
    MEDIUM = 15
    HARD = 20
    VERY_HARD = 25
    NEARLY_IMPOSSIBLE = 30


class ComparisonOutcome(str, Enum):
    """Graded result of comparing a roll against a target."""
    CRIT_SUCCESS = "Critical Success"  # natural 20
    SUCCESS = "Success"
    TIE = "Tie"
    FAILURE = "Failure"
    CRIT_FAILURE = "Critical Failure"  # natural 1


class RollDetails(BaseModel):
    """One resolved d20 roll for a single stat (total = d20_roll + modifier)."""
    model_config = ConfigDict(frozen=True)

    stat: CoreStat
    stat_value: Any = Field(description="Raw stat value as found on the sheet")
    modifier: int
    d20_roll: int = Field(ge=1, le=20, description="The natural d20 result")
    total: int


class EncounterType(str, Enum):
    COMBAT = "Combat"
    SOCIAL = "Social"
    PHYSICAL = "Physical"
    MENTAL = "Mental"
    EXPLORATION = "Exploration"
    OTHER = "Other"


class ResolutionMode(str, Enum):
    """How an encounter action is resolved."""
    OPPOSED = "opposed"
    VS_DC = "vs_dc"


class EncounterAction(BaseModel):
    """A named, pre-configured resolution recipe.

    Exactly one of ``secondary_stat`` (opposed against another character)
    or ``is_vs_dc`` (against a fixed target) is set.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    primary_stat: CoreStat
    secondary_stat: CoreStat | None = None
    is_vs_dc: bool = False

    @model_validator(mode="after")
    def check_single_mode(self) -> "EncounterAction":
        opposed = self.secondary_stat is not None
        if opposed == self.is_vs_dc:
            raise ValueError(
                f"Action '{self.name}' must define exactly one of secondary_stat or is_vs_dc"
            )
        return self

    @property
    def mode(self) -> ResolutionMode:
        return ResolutionMode.OPPOSED if self.secondary_stat is not None else ResolutionMode.VS_DC


class EncounterStatPairing(BaseModel):
    """Default stat pairing for an encounter type."""
    model_config = ConfigDict(frozen=True)

    encounter_type: EncounterType
    primary_stat: CoreStat
    secondary_stat: CoreStat | None = None


class CheckVsDCResult(BaseModel):
    """Outcome of a check against a fixed Difficulty Class."""
    model_config = ConfigDict(frozen=True)

    outcome: ComparisonOutcome
    roll_details: RollDetails
    dc: int


class OpposedCheckResult(BaseModel):
    """Outcome of a two-character contest, from char1's perspective."""
    model_config = ConfigDict(frozen=True)

    outcome: ComparisonOutcome
    char1_name: str
    char1_details: RollDetails
    char2_name: str
    char2_details: RollDetails
    encounter_action: EncounterAction


class LikelihoodLevel(str, Enum):
    """Prior probability labels for the oracle, ordered by chance of a yes."""
    IMPOSSIBLE = "Impossible"
    NO_WAY = "No way"
    VERY_UNLIKELY = "Very unlikely"
    UNLIKELY = "Unlikely"
    FIFTY_FIFTY = "50/50"
    LIKELY = "Likely"
    VERY_LIKELY = "Very likely"
    CERTAIN = "Certain"
    YES_SPECIAL = "Yes! (special)"

    @classmethod
    def parse(cls, value: "str | LikelihoodLevel") -> "LikelihoodLevel":
        """Resolve a label case-insensitively ("Very Likely" -> VERY_LIKELY).

        Raises:
            InvalidLikelihoodError: If the label is not one of the nine levels.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = " ".join(value.split()).lower()
            for level in cls:
                if level.value.lower() == wanted:
                    return level
        raise InvalidLikelihoodError(value)


class OracleBand(BaseModel):
    """One inclusive sub-range of the 1-100 percentile space."""
    model_config = ConfigDict(frozen=True)

    low: int = Field(ge=1, le=100)
    high: int = Field(ge=1, le=100)
    result: str
    is_yes: bool

    @model_validator(mode="after")
    def check_range(self) -> "OracleBand":
        if self.low > self.high:
            raise ValueError(f"Band low {self.low} is above high {self.high}")
        return self

    def contains(self, roll: int) -> bool:
        return self.low <= roll <= self.high


class OracleResultOutcome(BaseModel):
    """Result of consulting the oracle."""
    model_config = ConfigDict(frozen=True)

    likelihood: LikelihoodLevel
    roll: int = Field(ge=1, le=100)
    result: str
    is_yes: bool
    yes_threshold: int = Field(description="Display-only threshold for a simple yes")
