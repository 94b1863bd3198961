# Ring Steward
# Copyright (C) 2025  Ring Steward developers
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
SAVE_FILE_FILTER = f"Ring Steward Files (*{SAVE_FILE_EXTENSION});;All Files (*)"

# Event types
EVENT_FORMS = "forms"
EVENT_SPARRING = "sparring"
EVENT_TYPES = (EVENT_FORMS, EVENT_SPARRING)

# Pool naming
POOL_PREFIX = "P"
ALT_RING_VALUES = ("", "a", "b")

# Physical ring naming
PHYSICAL_RING_PREFIX = "PR"
OVERFLOW_SUFFIXES = ("a", "b")
UNASSIGNED_RING = "unassigned"

# Pool bounds
DEFAULT_NUM_POOLS = 1
MIN_POOLS = 1
MAX_POOLS = 10

# Age handling: the "18 and up" roster marker normalizes to this value
ADULT_AGE = 18
OPEN_MAX_AGE = 999

# Display value for a division of "not competing"
NOT_PARTICIPATING = "Not Participating"

# Ring balance thresholds (competitor counts)
RING_BALANCE_MIN_GOOD = 8
RING_BALANCE_MAX_GOOD = 12
RING_BALANCE_MIN_OK = 5
RING_BALANCE_MAX_OK = 15

# Rank order spacing leaves room for manual reordering
RANK_ORDER_STEP = 10

# History
DEFAULT_HISTORY_DEPTH = 50
MAX_PHYSICAL_RINGS = 14

# Gender keys
GENDER_MALE = "male"
GENDER_FEMALE = "female"
GENDER_MIXED = "mixed"

# Physical ring color map - ring number to hex color
RING_COLOR_MAP = {
    1: "#ff0000",  # red
    2: "#ffa500",  # orange
    3: "#ffff00",  # yellow
    4: "#34a853",  # green
    5: "#0000ff",  # blue
    6: "#fd2670",  # pink
    7: "#8441be",  # purple
    8: "#999999",  # gray
    9: "#000000",  # black
    10: "#b68a46",  # brown
    11: "#f78db3",  # light pink
    12: "#6fa8dc",  # light blue
    13: "#b6d7a8",  # light green
    14: "#b4a7d6",  # light purple
}

# Default divisions used for a new tournament
DEFAULT_DIVISIONS = [
    {"name": "Black Belt", "order": 1, "num_rings": 2, "abbreviation": "BLKB"},
    {"name": "Level 1", "order": 2, "num_rings": 2, "abbreviation": "LVL1"},
    {"name": "Level 2", "order": 3, "num_rings": 2, "abbreviation": "LVL2"},
    {"name": "Level 3", "order": 4, "num_rings": 2, "abbreviation": "LVL3"},
    {"name": "Beginner", "order": 5, "num_rings": 2, "abbreviation": "BGNR"},
]
DEFAULT_DIVISION_ORDER = 999
