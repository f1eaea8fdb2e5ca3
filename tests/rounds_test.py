from datetime import datetime, timedelta, timezone

import pytest

from pitwall.core.enums import RoundStatus, SessionKind
from pitwall.core.errors import UnknownSession
from pitwall.services import rounds

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)
PAST_DEADLINE = NOW - timedelta(hours=1)
FUTURE_DEADLINE = NOW + timedelta(hours=1)


def test_unset_round_follows_deadline(db, event):
    assert rounds.get_round_status(db, event.id, SessionKind.race) is None
    assert rounds.is_betting_closed(db, event.id, SessionKind.race, PAST_DEADLINE, now=NOW) is True
    assert rounds.is_betting_closed(db, event.id, SessionKind.race, FUTURE_DEADLINE, now=NOW) is False


def test_deadline_itself_is_still_open(db, event):
    assert rounds.is_betting_closed(db, event.id, SessionKind.race, NOW, now=NOW) is False


def test_open_override_beats_past_deadline(db, event):
    rounds.set_round_status(db, event.id, SessionKind.race, RoundStatus.open)
    assert rounds.is_betting_closed(db, event.id, SessionKind.race, PAST_DEADLINE, now=NOW) is False


@pytest.mark.parametrize("status", [RoundStatus.locked, RoundStatus.settled])
def test_locked_and_settled_close_regardless_of_time(db, event, status):
    rounds.set_round_status(db, event.id, SessionKind.qualifying, status)
    assert rounds.get_round_status(db, event.id, SessionKind.qualifying) == status
    assert rounds.is_betting_closed(db, event.id, SessionKind.qualifying, FUTURE_DEADLINE, now=NOW) is True


def test_status_is_per_session(db, event):
    rounds.set_round_status(db, event.id, SessionKind.qualifying, RoundStatus.locked)
    assert rounds.get_round_status(db, event.id, SessionKind.race) is None


def test_status_can_be_changed_and_cleared(db, event):
    rounds.set_round_status(db, event.id, SessionKind.race, RoundStatus.locked)
    rounds.set_round_status(db, event.id, SessionKind.race, RoundStatus.open)
    assert rounds.get_round_status(db, event.id, SessionKind.race) == RoundStatus.open

    rounds.clear_round_status(db, event.id, SessionKind.race)
    assert rounds.get_round_status(db, event.id, SessionKind.race) is None
    assert rounds.is_betting_closed(db, event.id, SessionKind.race, PAST_DEADLINE, now=NOW) is True


def test_settling_without_result_is_allowed(db, event):
    assert rounds.set_round_status(db, event.id, SessionKind.race, RoundStatus.settled) == RoundStatus.settled


def test_unknown_session_rejected(db, event):
    with pytest.raises(UnknownSession):
        rounds.set_round_status(db, event.id, SessionKind.sprint, RoundStatus.open)


def test_naive_deadline_treated_as_utc():
    naive = datetime(2026, 5, 1, 11, 0)
    assert rounds.window_closed(None, naive, NOW) is True
