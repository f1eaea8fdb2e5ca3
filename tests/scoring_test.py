from types import SimpleNamespace

from pitwall.core.enums import SessionKind
from pitwall.models.game import PredictionSettings
from pitwall.services.scoring import finishing_order, score_bet

GAME = PredictionSettings(
    season=2026,
    race_points=[25, 18, 15, 12, 10, 8, 6, 4, 2, 1],
    quali_points=[5, 4, 3, 2, 1],
    participation_point=1,
)


def _entries(*rows):
    return [SimpleNamespace(driver_id=d, position=p) for d, p in rows]


def test_right_drivers_wrong_order():
    actual = _entries((1, "1"), (2, "2"), (3, "3"))
    assert score_bet([2, 1, 3], SessionKind.race, actual, GAME) == 1 + 1 + 15


def test_driver_outside_scored_range_gets_nothing():
    actual = _entries(*[(d, str(d)) for d in range(1, 8)])
    # driver 7 finished P7, outside the five quali slots
    assert score_bet([7], SessionKind.qualifying, actual, GAME) == 0
    assert score_bet([7], SessionKind.sprint_quali, actual, GAME) == 0
    assert score_bet([1, 7], SessionKind.qualifying, actual, GAME) == 5


def test_no_result_scores_zero():
    assert score_bet([1, 2, 3], SessionKind.race, None, GAME) == 0
    assert score_bet([1, 2, 3], SessionKind.race, [], GAME) == 0


def test_slots_beyond_table_are_ignored():
    actual = _entries(*[(d, str(d)) for d in range(1, 10)])
    assert score_bet([1, 2, 3, 4, 5, 6, 7], SessionKind.qualifying, actual, GAME) == 5 + 4 + 3 + 2 + 1


def test_sorts_by_numeric_position_with_unclassified_last():
    actual = _entries((9, "DNF"), (2, "2"), (1, "1"), (10, "10"), (3, "3"))
    assert finishing_order(actual) == [1, 2, 3, 10, 9]
    assert score_bet([1, 2, 3], SessionKind.race, actual, GAME) == 25 + 18 + 15


def test_unclassified_driver_still_counts_inside_scored_range():
    actual = _entries((1, "1"), (2, "DNF"))
    game = PredictionSettings(season=2026, race_points=[3, 2], quali_points=[1], participation_point=1)
    # DNF sorts into slot 2 but still sits inside the top-2 window
    assert score_bet([2, 1], SessionKind.race, actual, game) == 1 + 1


def test_moving_an_exact_hit_to_a_cheaper_slot_never_helps():
    actual = _entries(*[(d, str(d)) for d in range(1, 11)])
    base = [1, 2, 3]
    swapped = [3, 2, 1]
    assert score_bet(swapped, SessionKind.race, actual, GAME) <= score_bet(base, SessionKind.race, actual, GAME)


def test_participation_point_is_configurable():
    actual = _entries((1, "1"), (2, "2"))
    game = PredictionSettings(season=2026, race_points=[10, 8], quali_points=[1], participation_point=3)
    assert score_bet([2, 1], SessionKind.sprint, actual, game) == 6
