"""Type hints used in Dart Tournament."""

from typing import Dict, List

PlayerId = str
MatchId = str
TeamIds = List[PlayerId]

# Pending winner per match id for the current round
MatchResults = Dict[MatchId, "Team"]
