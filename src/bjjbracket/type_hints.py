"""Type hints used in BJJ Bracket."""

from typing import Dict, Literal, Tuple

# Match slot numbers (for type hints)
Slot = Literal[1, 2]

# Identifiers
CompetitorID = str
MatchID = str

# List of competitors
# A manually chosen pairing of competitor ids
ManualPairing = Tuple[CompetitorID, CompetitorID]
# Matches of a division keyed by (round number, position)
BracketIndex = Dict[Tuple[int, int], "Match"]

#  LocalWords:  BracketIndex ManualPairing
