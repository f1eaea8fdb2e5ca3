"""
Prediction game leaderboard.

Built on every read from stored bets, results and bonus answers. A user
wins a session when they hold its top score and that score is above zero;
shared top scores all count as wins.
"""
from collections import defaultdict
from typing import Dict, List, Tuple

from sqlalchemy.orm import Session

from pitwall.core.enums import SessionKind
from pitwall.schemas.game import LeaderboardEntry
from pitwall.services import bets, bonus, providers
from pitwall.services.scoring import score_user_bet
from pitwall.services.settings import get_prediction_settings


def count_wins(session_scores: Dict[Tuple[int, SessionKind], Dict[int, int]]) -> Dict[int, int]:
    wins: Dict[int, int] = defaultdict(int)
    for scores in session_scores.values():
        best = max(scores.values(), default=0)
        if best <= 0:
            continue
        for user_id, score in scores.items():
            if score == best:
                wins[user_id] += 1
    return wins


def rank_entries(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """Points desc, then wins desc. Equal on both shares a rank (1, 1, 3)."""
    ordered = sorted(entries, key=lambda e: (-e.points, -e.wins))
    ranked: List[LeaderboardEntry] = []
    for idx, entry in enumerate(ordered):
        if ranked and (ranked[-1].points, ranked[-1].wins) == (entry.points, entry.wins):
            rank = ranked[-1].rank
        else:
            rank = idx + 1
        ranked.append(entry.model_copy(update={"rank": rank}))
    return ranked


def build_leaderboard(db: Session, season: int) -> List[LeaderboardEntry]:
    game = get_prediction_settings(db, season)
    users = {u.id: u for u in providers.list_users(db)}
    totals: Dict[int, int] = {uid: 0 for uid in users}
    session_scores: Dict[Tuple[int, SessionKind], Dict[int, int]] = defaultdict(dict)

    for bet in bets.list_bets(db, season):
        pts = score_user_bet(db, bet, game)
        totals[bet.user_id] = totals.get(bet.user_id, 0) + pts
        session_scores[(bet.event_id, bet.kind)][bet.user_id] = pts

    for user_id, pts in bonus.bonus_points_by_user(db, season).items():
        totals[user_id] = totals.get(user_id, 0) + pts

    wins = count_wins(session_scores)
    entries = []
    for user_id in sorted(totals):
        user = users.get(user_id)
        entries.append(LeaderboardEntry(
            user_id=user_id,
            username=user.username if user else "Unknown",
            avatar=user.avatar if user else "",
            points=totals[user_id],
            wins=wins.get(user_id, 0),
            rank=0,
        ))
    return rank_entries(entries)
