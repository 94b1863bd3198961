"""Bounded undo/redo of whole-dataset snapshots."""

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

from collections import deque
from typing import Deque, Optional

from ringsteward.constants import DEFAULT_HISTORY_DEPTH
from ringsteward.models.tournament import TournamentDataset
from ringsteward.utils import setup_logger

logger = setup_logger(__name__)


class UndoManager:
    """Undo and redo stacks of dataset deep copies.

    Both stacks hold at most ``depth`` snapshots; the oldest is dropped when
    a new one would exceed it. Recording a new change clears the redo stack.
    """

    def __init__(self, depth: int = DEFAULT_HISTORY_DEPTH):
        self.depth = max(1, depth)
        self._undo: Deque[TournamentDataset] = deque(maxlen=self.depth)
        self._redo: Deque[TournamentDataset] = deque(maxlen=self.depth)

    def record(self, dataset: TournamentDataset) -> None:
        """Remember the state before a change."""
        self._undo.append(dataset.clone())
        self._redo.clear()
        logger.debug(f"Recorded undo snapshot ({len(self._undo)}/{self.depth})")

    def undo(self, current: TournamentDataset) -> Optional[TournamentDataset]:
        """Step back one change.

        Args:
            current: The live dataset, kept for redo

        Returns:
            Dataset to restore, or None if there is nothing to undo
        """
        if not self._undo:
            logger.debug("Nothing to undo")
            return None
        self._redo.append(current.clone())
        return self._undo.pop()

    def redo(self, current: TournamentDataset) -> Optional[TournamentDataset]:
        """Re-apply the last undone change, or return None."""
        if not self._redo:
            logger.debug("Nothing to redo")
            return None
        self._undo.append(current.clone())
        return self._redo.pop()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def resize(self, depth: int) -> None:
        """Change the bound, dropping the oldest snapshots that no longer fit."""
        depth = max(1, depth)
        if depth == self.depth:
            return
        self.depth = depth
        self._undo = deque(self._undo, maxlen=depth)
        self._redo = deque(self._redo, maxlen=depth)
        logger.debug(f"History depth set to {depth}")

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
