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

# --- Constants ---

# Bracket generation
MIN_COMPETITORS = 2
ROUND_ROBIN_ROUND = 1
FIRST_ROUND = 1

# IBJJF scoring
PENALTY_POINTS = 2  # Points awarded to the opponent per penalty
DISQUALIFICATION_PENALTIES = 4  # Penalties that cause an automatic loss

# Competitor limits
MIN_COMPETITOR_AGE = 4
MAX_COMPETITOR_AGE = 150
GENDER_SEPARATION_AGE = 10  # Athletes under this age compete in mixed divisions
KIDS_MAX_AGE = 15  # Athletes at or under this age are kids
MIN_WEIGHT_KG = 10.0
MAX_WEIGHT_KG = 250.0

# Weight classes with a ceiling at or above this value have no upper limit
UNLIMITED_WEIGHT_KG = 999.0

# Double elimination handling
DOUBLE_ELIMINATION_FALLBACK = "fallback"
DOUBLE_ELIMINATION_REJECT = "reject"
DOUBLE_ELIMINATION_POLICIES = (DOUBLE_ELIMINATION_FALLBACK, DOUBLE_ELIMINATION_REJECT)
DEFAULT_DOUBLE_ELIMINATION_POLICY = DOUBLE_ELIMINATION_FALLBACK

# Match notes
NOTE_BYE_WALKOVER = "Walkover - no opponent available"
NOTE_NO_SHOW_WALKOVER = "Walkover - opponent did not show up"
NOTE_SINGLE_FEEDER_WALKOVER = "Walkover - no opponent advanced to this match"

# Slots
FIRST_SLOT = 1
SECOND_SLOT = 2
