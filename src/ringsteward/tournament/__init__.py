"""Tournament dataset ownership for Ring Steward.

The :class:`Tournament` owns one dataset and applies every change to it,
keeping undo history and notifying subscribers.
"""

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

from ringsteward.tournament.tournament import (
    EVENT_CHECKPOINTS,
    EVENT_DATASET,
    EVENT_HISTORY,
    SLICE_NAMES,
    Tournament,
)

__all__ = [
    "Tournament",
    "SLICE_NAMES",
    "EVENT_DATASET",
    "EVENT_CHECKPOINTS",
    "EVENT_HISTORY",
]
