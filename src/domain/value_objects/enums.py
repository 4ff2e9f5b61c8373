from enum import Enum


class MatchStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ViolationKind(str, Enum):
    HOUSE_PLAYER_COUNT = "HOUSE_PLAYER_COUNT"
    AWAY_PLAYER_COUNT = "AWAY_PLAYER_COUNT"
    HOUSE_MANAGER_MISSING = "HOUSE_MANAGER_MISSING"
    AWAY_MANAGER_MISSING = "AWAY_MANAGER_MISSING"
    REFEREE_MISSING = "REFEREE_MISSING"


class AlignmentOutcome(str, Enum):
    CORRECT = "CORRECT"
    INCORRECT = "INCORRECT"
    NOT_FOUND = "NOT_FOUND"


class PersonKind(str, Enum):
    PLAYER = "Player"
    MANAGER = "Manager"
