"""Testing module for Partner Pairing.

This module provides the testing functionality of the project:
- Random Tournament Generator (RTG) with invariant checks
- Match-count fairness projection
- Unit testing

Use the unified CLI: partner-test
"""

# Partner Pairing
# Copyright (C) 2025  Partner Pairing developers
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

from partnerpairing.testing.rtg import (
    InvariantReport,
    RandomTournamentGenerator,
    ResultPattern,
    RTGConfig,
    ScoreDistribution,
    check_invariants,
)

__all__ = [
    "InvariantReport",
    "RandomTournamentGenerator",
    "RTGConfig",
    "ResultPattern",
    "ScoreDistribution",
    "check_invariants",
]
