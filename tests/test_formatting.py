"""Tests for outcome, oracle and dice text rendering."""

import pytest

from rpg_resolver.checks import skill_check_vs_dc
from rpg_resolver.dice import DiceRollResult
from rpg_resolver.formatting import (
    OUTCOME_PHRASES,
    format_dice_roll,
    format_oracle_result,
    format_outcome,
    format_roll_details,
)
from rpg_resolver.models import (
    CheckVsDCResult,
    ComparisonOutcome,
    CoreStat,
    EncounterAction,
    OpposedCheckResult,
    RollDetails,
)
from rpg_resolver.oracle import consult_for_roll


def details(stat: CoreStat, d20_roll: int, modifier: int) -> RollDetails:
    return RollDetails(
        stat=stat,
        stat_value=10 + 2 * modifier,
        modifier=modifier,
        d20_roll=d20_roll,
        total=d20_roll + modifier,
    )


class TestRollDetails:

    def test_positive_modifier(self):
        assert format_roll_details(details(CoreStat.STRENGTH, 15, 2)) == (
            "Roll: 15 (d20) +2 (Strength Mod) = 17"
        )

    def test_zero_modifier_is_plus(self):
        assert "(d20) +0 (Luck Mod)" in format_roll_details(details(CoreStat.LUCK, 7, 0))

    def test_negative_modifier_uses_absolute_value(self):
        text = format_roll_details(details(CoreStat.CHARISMA, 5, -1))
        assert text == "Roll: 5 (d20) -1 (Charisma Mod) = 4"
        assert "--" not in text and "+-" not in text


class TestFormatOutcome:

    def test_none(self):
        assert format_outcome(None) == ""

    def test_check_vs_dc(self):
        result = CheckVsDCResult(
            outcome=ComparisonOutcome.SUCCESS,
            roll_details=details(CoreStat.AGILITY, 14, 3),
            dc=15,
        )
        assert format_outcome(result) == (
            "Success. (vs DC 15) Roll: 14 (d20) +3 (Agility Mod) = 17"
        )

    def test_opposed_check(self):
        result = OpposedCheckResult(
            outcome=ComparisonOutcome.CRIT_FAILURE,
            char1_name="Mara",
            char1_details=details(CoreStat.CHARISMA, 1, -1),
            char2_name="Ogre",
            char2_details=details(CoreStat.INTELLIGENCE, 9, -3),
            encounter_action=EncounterAction(
                name="Persuade",
                primary_stat=CoreStat.CHARISMA,
                secondary_stat=CoreStat.INTELLIGENCE,
            ),
        )
        assert format_outcome(result) == (
            "Critical Failure! (Persuade)\n"
            "  Mara (Charisma): Roll: 1 (d20) -1 (Charisma Mod) = 0\n"
            "  Ogre (Intelligence): Roll: 9 (d20) -3 (Intelligence Mod) = 6"
        )

    @pytest.mark.parametrize("outcome,phrase", [
        (ComparisonOutcome.CRIT_SUCCESS, "Critical Success!"),
        (ComparisonOutcome.SUCCESS, "Success."),
        (ComparisonOutcome.TIE, "Tie."),
        (ComparisonOutcome.FAILURE, "Failure."),
        (ComparisonOutcome.CRIT_FAILURE, "Critical Failure!"),
    ])
    def test_phrases(self, outcome, phrase):
        result = CheckVsDCResult(outcome=outcome, roll_details=details(CoreStat.LUCK, 10, 0), dc=10)
        assert format_outcome(result).startswith(phrase)

    def test_every_outcome_has_a_phrase(self):
        assert set(OUTCOME_PHRASES) == set(ComparisonOutcome)

    def test_real_checks_start_with_a_phrase(self, hero):
        phrases = tuple(OUTCOME_PHRASES.values())
        for dc in range(0, 31):
            text = format_outcome(skill_check_vs_dc(hero, CoreStat.PERCEPTION, dc))
            assert text.startswith(phrases)


class TestFormatOracle:

    def test_yes(self):
        text = format_oracle_result(consult_for_roll("Likely", 40))
        assert text == "Yes\n(PASS): You rolled 40 vs <= 75 needed for Yes on Likely"

    def test_no(self):
        text = format_oracle_result(consult_for_roll("very unlikely", 95))
        assert text == "No, and...\n(FAIL): You rolled 95 vs <= 15 needed for Yes on Very unlikely"


class TestFormatDiceRoll:

    def test_with_modifier(self):
        result = DiceRollResult(notation="3d6+2", rolls=[4, 1, 6], modifier=2, total=13)
        assert format_dice_roll(result) == "3d6+2: [4, 1, 6] +2 = 13"

    def test_without_modifier(self):
        result = DiceRollResult(notation="1d20", rolls=[17], total=17)
        assert format_dice_roll(result) == "1d20: [17] = 17"

    def test_negative_modifier(self):
        result = DiceRollResult(notation="1d8-1", rolls=[1], modifier=-1, total=0)
        assert format_dice_roll(result) == "1d8-1: [1] -1 = 0"
