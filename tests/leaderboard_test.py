from pitwall.core.enums import SessionKind
from pitwall.schemas.game import BonusQuestionIn, LeaderboardEntry, PredictionSettingsIn
from pitwall.schemas.results import ResultEntryIn
from pitwall.services import bets, bonus, results
from pitwall.services.leaderboard import build_leaderboard, count_wins, rank_entries
from pitwall.services.settings import update_prediction_settings
from tests.conftest import FUTURE, SEASON


def _result(db, drivers, event, kind, codes):
    entries = [
        ResultEntryIn(driver_id=drivers[c].id, team_id=drivers[c].team_id, position=str(i + 1))
        for i, c in enumerate(codes)
    ]
    results.save_session_result(db, event.id, kind, entries)


def _by_user(board):
    return {e.username: e for e in board}


def test_shared_top_score_credits_every_winner(db, drivers, users, event, sprint_event):
    update_prediction_settings(db, PredictionSettingsIn(
        season=SEASON, race_points=[8, 7, 6, 5, 4, 3, 2, 1], quali_points=[5, 4, 3, 2, 1], participation_point=1,
    ))
    alice, bob = users["alice"].id, users["bob"].id
    bets.submit_bet(db, alice, sprint_event.id, SessionKind.sprint, [drivers["NOR"].id])
    bets.submit_bet(db, bob, sprint_event.id, SessionKind.sprint, [drivers["NOR"].id])
    # nobody scores in this one
    bets.submit_bet(db, alice, event.id, SessionKind.race, [drivers["HAM"].id])
    bets.submit_bet(db, bob, event.id, SessionKind.race, [drivers["PIA"].id])

    _result(db, drivers, sprint_event, SessionKind.sprint, ["NOR", "VER"])
    _result(db, drivers, event, SessionKind.race, ["VER"])

    board = _by_user(build_leaderboard(db, SEASON))
    assert board["alice"].points == board["bob"].points == 8
    assert board["alice"].wins == board["bob"].wins == 1
    assert board["alice"].rank == board["bob"].rank == 1
    assert board["admin"].points == 0
    assert board["admin"].rank == 3


def test_totals_include_bonus_points(db, drivers, users, event):
    alice, bob = users["alice"].id, users["bob"].id
    bets.submit_bet(db, alice, event.id, SessionKind.race, [drivers["VER"].id, drivers["NOR"].id])
    bets.submit_bet(db, bob, event.id, SessionKind.race, [drivers["NOR"].id, drivers["VER"].id])
    _result(db, drivers, event, SessionKind.race, ["VER", "NOR"])

    q = bonus.create_bonus_question(db, BonusQuestionIn(
        season=SEASON, question="Most poles?", points=10, deadline=FUTURE,
    ))
    bonus.submit_bonus_answer(db, bob, q.id, "Verstappen")
    bonus.grade_bonus_question(db, q.id, "verstappen")

    board = build_leaderboard(db, SEASON)
    top = _by_user(board)
    # default race table [10, 8, ...], participation 1
    assert top["alice"].points == 18
    assert top["bob"].points == 1 + 1 + 10
    assert top["alice"].wins == 1
    assert top["bob"].wins == 0
    assert [e.username for e in board[:2]] == ["alice", "bob"]
    assert top["bob"].avatar == "b.png"


def test_no_bets_means_zeroes_for_everyone(db, users):
    board = build_leaderboard(db, SEASON)
    assert len(board) == 3
    assert all(e.points == 0 and e.wins == 0 and e.rank == 1 for e in board)


def test_leaderboard_is_stable_across_reads(db, drivers, users, event):
    bets.submit_bet(db, users["alice"].id, event.id, SessionKind.race, [drivers["VER"].id])
    _result(db, drivers, event, SessionKind.race, ["VER"])
    assert build_leaderboard(db, SEASON) == build_leaderboard(db, SEASON)


def test_count_wins_ignores_zero_sessions():
    scores = {
        (1, SessionKind.race): {1: 0, 2: 0},
        (1, SessionKind.qualifying): {1: 4, 2: 4, 3: 1},
        (2, SessionKind.race): {1: 7, 3: 9},
    }
    assert dict(count_wins(scores)) == {1: 1, 2: 1, 3: 1}


def test_rank_entries_points_then_wins():
    def e(uid, points, wins):
        return LeaderboardEntry(user_id=uid, username=str(uid), avatar="", points=points, wins=wins, rank=0)

    ranked = rank_entries([e(1, 10, 0), e(2, 10, 2), e(3, 12, 0), e(4, 10, 0)])
    assert [(x.user_id, x.rank) for x in ranked] == [(3, 1), (2, 2), (1, 3), (4, 3)]
