from typing import NewType

MatchId = NewType("MatchId", int)
ManagerId = NewType("ManagerId", int)
RefereeId = NewType("RefereeId", int)
PlayerId = NewType("PlayerId", int)
