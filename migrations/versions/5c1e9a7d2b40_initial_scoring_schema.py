"""initial scoring schema

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-18 10:12:31.204517

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e9a7d2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def session_kind():
    return sa.Enum(
        "fp1", "fp2", "fp3", "qualifying", "sprint_quali", "sprint", "race",
        name="sessionkind", native_enum=False, length=20,
    )


def upgrade() -> None:
    # Collaborator data, read-only for the scoring core
    op.create_table(
        "teams",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_teams_id", "teams", ["id"])
    op.create_table(
        "drivers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("code", sa.String(), nullable=True),
        sa.Column("race_number", sa.Integer(), nullable=True),
        sa.Column("team_id", sa.Integer(), sa.ForeignKey("teams.id", ondelete="SET NULL"), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_drivers_id", "drivers", ["id"])
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("season", sa.Integer(), nullable=False),
        sa.Column("round", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("country", sa.String(), nullable=True),
        sa.Column("format", sa.Enum("standard", "sprint", name="raceformat", native_enum=False, length=20), nullable=False),
        sa.UniqueConstraint("season", "round", name="unique_events_season_round"),
    )
    op.create_index("ix_events_id", "events", ["id"])
    op.create_index("ix_events_season", "events", ["season"])
    op.create_table(
        "event_sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("kind", session_kind(), nullable=False),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("event_id", "kind", name="unique_event_session_kind"),
    )
    op.create_index("ix_event_sessions_id", "event_sessions", ["id"])
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(), nullable=False, unique=True),
        sa.Column("avatar", sa.String(), nullable=False, server_default=""),
        sa.Column(
            "role",
            sa.Enum("admin", "it", "editor", "author", "moderator", "vip", "user",
                    name="userrole", native_enum=False, length=20),
            nullable=False,
        ),
    )
    op.create_index("ix_users_id", "users", ["id"])

    # Results and standings
    op.create_table(
        "session_results",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("kind", session_kind(), nullable=False),
        sa.Column("distance_pct", sa.Integer(), nullable=True),
        sa.UniqueConstraint("event_id", "kind", name="unique_result_event_kind"),
    )
    op.create_index("ix_session_results_id", "session_results", ["id"])
    op.create_table(
        "result_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("result_id", sa.Integer(), sa.ForeignKey("session_results.id", ondelete="CASCADE"), nullable=False),
        sa.Column("row", sa.Integer(), nullable=False),
        sa.Column("driver_id", sa.Integer(), sa.ForeignKey("drivers.id", ondelete="SET NULL"), nullable=True),
        sa.Column("driver_name_raw", sa.String(), nullable=False),
        sa.Column("team_id", sa.Integer(), sa.ForeignKey("teams.id", ondelete="SET NULL"), nullable=True),
        sa.Column("position", sa.String(), nullable=False),
        sa.Column("laps", sa.Integer(), nullable=False),
        sa.Column("time", sa.String(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("points_override", sa.Boolean(), nullable=False),
        sa.Column("q1", sa.String(), nullable=True),
        sa.Column("q2", sa.String(), nullable=True),
        sa.Column("q3", sa.String(), nullable=True),
        sa.UniqueConstraint("result_id", "row", name="unique_result_row"),
    )
    op.create_index("ix_result_entries_id", "result_entries", ["id"])
    op.create_index("ix_result_entries_driver", "result_entries", ["driver_id"])
    op.create_table(
        "standings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("season", sa.Integer(), nullable=False),
        sa.Column("subject", sa.Enum("driver", "team", name="standingsubject", native_enum=False, length=10), nullable=False),
        sa.Column("subject_id", sa.Integer(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("rank", sa.Integer(), nullable=False),
        sa.Column("trend", sa.Enum("up", "down", "same", name="trend", native_enum=False, length=10), nullable=False),
        sa.UniqueConstraint("season", "subject", "subject_id", name="unique_standing_subject"),
    )
    op.create_index("ix_standings_id", "standings", ["id"])
    op.create_index("ix_standings_season_rank", "standings", ["season", "subject", "rank"])

    # Prediction game
    op.create_table(
        "prediction_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("season", sa.Integer(), nullable=False, unique=True),
        sa.Column("race_points", sa.JSON(), nullable=False),
        sa.Column("quali_points", sa.JSON(), nullable=False),
        sa.Column("participation_point", sa.Integer(), nullable=False),
    )
    op.create_index("ix_prediction_settings_id", "prediction_settings", ["id"])
    op.create_table(
        "round_states",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("kind", session_kind(), nullable=False),
        sa.Column("status", sa.Enum("open", "locked", "settled", name="roundstatus", native_enum=False, length=10), nullable=False),
        sa.UniqueConstraint("event_id", "kind", name="unique_round_event_kind"),
    )
    op.create_index("ix_round_states_id", "round_states", ["id"])
    op.create_table(
        "user_bets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("kind", session_kind(), nullable=False),
        sa.Column("season", sa.Integer(), nullable=False),
        sa.Column("drivers", sa.JSON(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "event_id", "kind", "season", name="unique_bet_user_event_kind_season"),
    )
    op.create_index("ix_user_bets_id", "user_bets", ["id"])
    op.create_index("ix_user_bets_season", "user_bets", ["season"])
    op.create_table(
        "bonus_questions",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("season", sa.Integer(), nullable=False),
        sa.Column("question", sa.String(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("deadline", sa.DateTime(timezone=True), nullable=False),
        sa.Column("correct_answer", sa.String(), nullable=True),
    )
    op.create_index("ix_bonus_questions_season", "bonus_questions", ["season"])
    op.create_table(
        "user_bonus_bets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("question_id", sa.String(), sa.ForeignKey("bonus_questions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("answer", sa.String(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "question_id", name="unique_bonus_user_question"),
    )
    op.create_index("ix_user_bonus_bets_id", "user_bonus_bets", ["id"])


def downgrade() -> None:
    for table in (
        "user_bonus_bets", "bonus_questions", "user_bets", "round_states",
        "prediction_settings", "standings", "result_entries", "session_results",
        "users", "event_sessions", "events", "drivers", "teams",
    ):
        op.drop_table(table)
