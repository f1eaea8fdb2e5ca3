import enum


class SessionKind(str, enum.Enum):
    fp1 = "fp1"
    fp2 = "fp2"
    fp3 = "fp3"
    qualifying = "qualifying"
    sprint_quali = "sprint_quali"
    sprint = "sprint"
    race = "race"

    @property
    def is_qualifying(self) -> bool:
        return self in (SessionKind.qualifying, SessionKind.sprint_quali)

    @property
    def scores_championship(self) -> bool:
        return self in (SessionKind.race, SessionKind.sprint)

    @property
    def is_bettable(self) -> bool:
        return self.is_qualifying or self.scores_championship


SPRINT_ONLY_KINDS = {SessionKind.sprint, SessionKind.sprint_quali}


class RaceFormat(str, enum.Enum):
    standard = "standard"
    sprint = "sprint"


class RoundStatus(str, enum.Enum):
    open = "open"
    locked = "locked"
    settled = "settled"


class Trend(str, enum.Enum):
    up = "up"
    down = "down"
    same = "same"


class StandingSubject(str, enum.Enum):
    driver = "driver"
    team = "team"


class UserRole(str, enum.Enum):
    admin = "admin"
    it = "it"
    editor = "editor"
    author = "author"
    moderator = "moderator"
    vip = "vip"
    user = "user"


# Roles allowed to run the prediction game (rounds, grading, settings).
GAME_MANAGER_ROLES = {
    UserRole.admin,
    UserRole.it,
    UserRole.editor,
    UserRole.author,
    UserRole.moderator,
}
