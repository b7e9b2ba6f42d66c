"""EngineConfig data class."""

# BJJ Bracket
# Copyright (C) 2025  BJJ Bracket developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass
from typing import Any, Dict, Optional

from bjjbracket.constants import (
    DEFAULT_DOUBLE_ELIMINATION_POLICY,
    DOUBLE_ELIMINATION_POLICIES,
)
from bjjbracket.exceptions import InvalidConfigurationException


@dataclass
class EngineConfig:
    """Bracket engine configuration settings.

    Attributes
    ----------
    seed : int or None
        Seed for the single-elimination shuffle. ``None`` draws a fresh
        random order each time.
    shuffle_single_elimination : bool
        Randomize the entry order of single-elimination brackets. When False
        competitors are paired in roster order.
    double_elimination_policy : str
        ``"fallback"`` builds a single-elimination shaped bracket for double
        elimination divisions and logs a warning; ``"reject"`` refuses them.
    auto_advance_walkovers : bool
        Place walkover winners into their next-round match during generation.
    """

    seed: Optional[int] = None
    shuffle_single_elimination: bool = True
    double_elimination_policy: str = DEFAULT_DOUBLE_ELIMINATION_POLICY
    auto_advance_walkovers: bool = True

    def __post_init__(self) -> None:
        if self.double_elimination_policy not in DOUBLE_ELIMINATION_POLICIES:
            raise InvalidConfigurationException(
                f"Unknown double elimination policy: {self.double_elimination_policy!r} "
                f"(expected one of {', '.join(DOUBLE_ELIMINATION_POLICIES)})"
            )
        if self.seed is not None and not isinstance(self.seed, int):
            raise InvalidConfigurationException(f"Seed must be an integer: {self.seed!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "seed": self.seed,
            "shuffle_single_elimination": self.shuffle_single_elimination,
            "double_elimination_policy": self.double_elimination_policy,
            "auto_advance_walkovers": self.auto_advance_walkovers,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            seed=data.get("seed"),
            shuffle_single_elimination=data.get("shuffle_single_elimination", True),
            double_elimination_policy=data.get(
                "double_elimination_policy", DEFAULT_DOUBLE_ELIMINATION_POLICY
            ),
            auto_advance_walkovers=data.get("auto_advance_walkovers", True),
        )
