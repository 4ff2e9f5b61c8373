from .alignment import AlignmentCheck, ViolationReport
from .match import MatchSnapshot
from .people import Manager, Player, Referee
from .statistics import CardStatistic, MinutesPlayedStatistic

__all__ = [
    "AlignmentCheck",
    "CardStatistic",
    "Manager",
    "MatchSnapshot",
    "MinutesPlayedStatistic",
    "Player",
    "Referee",
    "ViolationReport",
]
