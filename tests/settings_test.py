import pytest

from pitwall.core.errors import InvalidConfiguration
from pitwall.schemas.game import PredictionSettingsIn
from pitwall.services.settings import (
    DEFAULT_QUALI_POINTS, DEFAULT_RACE_POINTS, get_prediction_settings, update_prediction_settings,
)
from tests.conftest import SEASON


def test_defaults_when_nothing_stored(db):
    game = get_prediction_settings(db)
    assert game.season == SEASON
    assert game.race_points == DEFAULT_RACE_POINTS
    assert game.quali_points == DEFAULT_QUALI_POINTS
    assert game.participation_point == 1


def test_update_and_read_back(db):
    update_prediction_settings(db, PredictionSettingsIn(
        season=SEASON, race_points=[25, 18, 15], quali_points=[3, 2, 1], participation_point=2,
    ))
    game = get_prediction_settings(db, SEASON)
    assert game.race_points == [25, 18, 15]
    assert game.quali_points == [3, 2, 1]
    assert game.participation_point == 2


@pytest.mark.parametrize("race, quali, participation", [
    ([], [3, 2, 1], 1),
    ([10, 8], [], 1),
    ([10, -1], [3], 1),
    ([10, 8], [3], -1),
])
def test_invalid_settings_keep_previous(db, race, quali, participation):
    update_prediction_settings(db, PredictionSettingsIn(
        season=SEASON, race_points=[5, 3], quali_points=[2, 1], participation_point=1,
    ))
    with pytest.raises(InvalidConfiguration):
        update_prediction_settings(db, PredictionSettingsIn(
            season=SEASON, race_points=race, quali_points=quali, participation_point=participation,
        ))
    game = get_prediction_settings(db, SEASON)
    assert game.race_points == [5, 3]
    assert game.quali_points == [2, 1]
