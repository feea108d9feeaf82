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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"
SNAPSHOT_KEY = "tournament"

# Player score (skill rating), one decimal place
MIN_PLAYER_SCORE = 0.5
MAX_PLAYER_SCORE = 5.0
DEFAULT_PLAYER_SCORE = 2.5
SCORE_PRECISION = 1

# Match score (games won by a team)
MIN_MATCH_SCORE = 0
MAX_MATCH_SCORE = 50

# Court capacity
PLAYERS_PER_TEAM = 2
TEAMS_PER_COURT = 2
PLAYERS_PER_COURT = PLAYERS_PER_TEAM * TEAMS_PER_COURT

# Tournament defaults
DEFAULT_COURTS_COUNT = 4
DEFAULT_MATCH_DURATION = 25  # minutes
DEFAULT_TOURNAMENT_NAME = "Untitled Tournament"

# A projected spread above this many matches calls for a corrective round
FAIRNESS_MAX_SPREAD = 1

# A corrective Group needs enough teams for at least one match
MIN_CORRECTIVE_TEAMS = TEAMS_PER_COURT

# Match winner markers
WINNER_TEAM_A = "team_a"
WINNER_TEAM_B = "team_b"
WINNER_TIE = "tie"

# Id templates
TEAM_ID_TEMPLATE = "G{group}T{number}"
MATCH_ID_TEMPLATE = "R{round}M{number}"
