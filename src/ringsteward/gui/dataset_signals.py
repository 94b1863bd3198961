"""Qt signal bridge for tournament change notifications."""

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

from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from ringsteward.tournament import Tournament


class DatasetSignals(QObject):
    """Re-emits a tournament's change callbacks as Qt signals.

    Views connect to ``changed`` to refresh, and to ``history_changed`` to
    enable or disable their undo and redo actions.
    """

    changed = pyqtSignal(str)
    history_changed = pyqtSignal(bool, bool)

    def __init__(self, tournament: Tournament, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.tournament = tournament
        self._unsubscribe = tournament.subscribe(self._on_change)

    def _on_change(self, event: str) -> None:
        self.changed.emit(event)
        self.history_changed.emit(self.tournament.can_undo, self.tournament.can_redo)

    def disconnect_tournament(self) -> None:
        """Stop forwarding changes."""
        self._unsubscribe()
