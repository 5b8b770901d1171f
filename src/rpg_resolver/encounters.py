"""
Static catalog of encounter actions.

Each encounter type lists the actions a player can pick, tagged with the
stat(s) they use and whether they are opposed or rolled against a DC.
The catalog is built and validated once at import and is read-only.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from .exceptions import ConfigurationError
from .models import (
    CoreStat,
    EncounterAction,
    EncounterStatPairing,
    EncounterType,
    ResolutionMode,
)

logger = logging.getLogger("rpg-resolver.encounters")

STR = CoreStat.STRENGTH
PER = CoreStat.PERCEPTION
END = CoreStat.ENDURANCE
CHA = CoreStat.CHARISMA
INT = CoreStat.INTELLIGENCE
AGI = CoreStat.AGILITY
LCK = CoreStat.LUCK


def _opposed(name: str, primary: CoreStat, secondary: CoreStat) -> EncounterAction:
    return EncounterAction(name=name, primary_stat=primary, secondary_stat=secondary)


def _vs_dc(name: str, primary: CoreStat) -> EncounterAction:
    return EncounterAction(name=name, primary_stat=primary, is_vs_dc=True)


_RAW_CATALOG: dict[EncounterType, tuple[EncounterAction, ...]] = {
    EncounterType.COMBAT: (
        _opposed("Melee Attack", STR, AGI),
        _opposed("Ranged Attack", AGI, AGI),
        _opposed("Unarmed Attack", STR, AGI),
        _vs_dc("Strength Save", STR),
        _vs_dc("Agility Save", AGI),
        _vs_dc("Endurance Save", END),
    ),
    EncounterType.SOCIAL: (
        _opposed("Persuade", CHA, INT),
        _opposed("Deceive/Bluff", CHA, PER),
        _opposed("Detect Lie", PER, CHA),
        _opposed("Intimidate", CHA, END),
        _opposed("Negotiate/Barter", CHA, INT),
        _opposed("Social Media Post", CHA, PER),
    ),
    EncounterType.PHYSICAL: (
        _opposed("Chase/Evade", AGI, AGI),
        _opposed("Spot/Observe (Opposed)", PER, AGI),
        _opposed("Sneak/Shadow", AGI, PER),
        _vs_dc("Drive/Pilot", AGI),
        _vs_dc("Endure Stress", END),
        _vs_dc("Withstand Fatigue", END),
        _vs_dc("Climb", STR),
        _vs_dc("Jump", STR),
        _vs_dc("Swim", STR),
    ),
    EncounterType.MENTAL: (
        _opposed("Hack/Bypass (Opposed)", INT, INT),
        _opposed("Research/Analyze (Opposed)", INT, INT),
        _opposed("First Aid/Medical", INT, END),
        _vs_dc("Hack/Bypass (vs DC)", INT),
        _vs_dc("Research/Analyze (vs DC)", INT),
        _vs_dc("Improvise/Adapt", INT),
    ),
    EncounterType.EXPLORATION: (
        _vs_dc("Perception Check", PER),
        _vs_dc("Survival Check", END),
        _vs_dc("Investigation Check", INT),
        _vs_dc("Navigation Check", INT),
    ),
    EncounterType.OTHER: (
        _opposed("Luck Test (Opposed)", LCK, LCK),
        _vs_dc("Luck Test (vs DC 50%)", LCK),
    ),
}

_RAW_PAIRINGS: dict[EncounterType, EncounterStatPairing] = {
    EncounterType.COMBAT: EncounterStatPairing(encounter_type=EncounterType.COMBAT, primary_stat=STR, secondary_stat=AGI),
    EncounterType.SOCIAL: EncounterStatPairing(encounter_type=EncounterType.SOCIAL, primary_stat=CHA, secondary_stat=INT),
    EncounterType.PHYSICAL: EncounterStatPairing(encounter_type=EncounterType.PHYSICAL, primary_stat=AGI, secondary_stat=AGI),
    EncounterType.MENTAL: EncounterStatPairing(encounter_type=EncounterType.MENTAL, primary_stat=INT, secondary_stat=INT),
    EncounterType.OTHER: EncounterStatPairing(encounter_type=EncounterType.OTHER, primary_stat=LCK, secondary_stat=LCK),
    # Exploration is rolled against a DC
    EncounterType.EXPLORATION: EncounterStatPairing(encounter_type=EncounterType.EXPLORATION, primary_stat=PER),
}


def validate_catalog(catalog: Mapping[EncounterType, tuple[EncounterAction, ...]]) -> None:
    """Check every catalog entry before the catalog is published.

    Each action must be resolvable in exactly one mode and action names must
    be unique within their encounter type.

    Raises:
        ConfigurationError: On the first invalid entry.
    """
    for encounter_type, actions in catalog.items():
        seen: set[str] = set()
        for action in actions:
            if not isinstance(action, EncounterAction):
                raise ConfigurationError(
                    f"{encounter_type.value}: catalog entry {action!r} is not an EncounterAction"
                )
            opposed = action.secondary_stat is not None
            if opposed == action.is_vs_dc:
                raise ConfigurationError(
                    f"{encounter_type.value}: action '{action.name}' must be either opposed or vs DC",
                    {"encounter_type": encounter_type.value, "action": action.name},
                )
            if action.name in seen:
                raise ConfigurationError(
                    f"{encounter_type.value}: duplicate action '{action.name}'",
                    {"encounter_type": encounter_type.value, "action": action.name},
                )
            seen.add(action.name)


validate_catalog(_RAW_CATALOG)

ENCOUNTER_ACTIONS: Mapping[EncounterType, tuple[EncounterAction, ...]] = MappingProxyType(_RAW_CATALOG)
ENCOUNTER_STAT_PAIRINGS: Mapping[EncounterType, EncounterStatPairing] = MappingProxyType(_RAW_PAIRINGS)


def _coerce_type(category: EncounterType | str | None) -> EncounterType | None:
    if category is None:
        return None
    try:
        return EncounterType(category)
    except ValueError:
        logger.debug(f"Unknown encounter type: {category!r}")
        return None


def get_encounter_actions(category: EncounterType | str | None) -> tuple[EncounterAction, ...]:
    """Return the actions for an encounter type.

    Unknown or missing types give an empty tuple; having no actions to
    offer is a normal state, not an error.
    """
    encounter_type = _coerce_type(category)
    if encounter_type is None:
        return ()
    return ENCOUNTER_ACTIONS.get(encounter_type, ())


def find_encounter_action(
    category: EncounterType | str | None,
    name: str,
) -> EncounterAction | None:
    """Look up a single action by name (case-insensitive) within a type."""
    wanted = name.strip().lower()
    for action in get_encounter_actions(category):
        if action.name.lower() == wanted:
            return action
    return None


def get_encounter_stat_pairing(category: EncounterType | str | None) -> EncounterStatPairing | None:
    """Return the default stat pairing for an encounter type, if any."""
    encounter_type = _coerce_type(category)
    if encounter_type is None:
        return None
    return ENCOUNTER_STAT_PAIRINGS.get(encounter_type)


def actions_by_mode(
    category: EncounterType | str | None,
    mode: ResolutionMode,
) -> tuple[EncounterAction, ...]:
    """Filter a type's actions down to one resolution mode."""
    return tuple(a for a in get_encounter_actions(category) if a.mode is mode)
