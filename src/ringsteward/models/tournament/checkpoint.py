"""Checkpoint and diff data models."""

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

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Set

from ringsteward.models.competitor import Competitor

if TYPE_CHECKING:
    from ringsteward.models.tournament.dataset import TournamentDataset


@dataclass(frozen=True)
class Checkpoint:
    """
    Named, timestamped, immutable snapshot of the whole dataset.

    Attributes
    ----------
    id : str
        Unique checkpoint identifier.
    name : str
        Display name. Renaming produces a new ``Checkpoint``.
    timestamp : datetime
        Creation time.
    dataset : TournamentDataset
        Deep copy owned by the checkpoint. Never handed out directly.
    """

    id: str
    name: str
    timestamp: datetime
    dataset: "TournamentDataset"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize checkpoint to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "timestamp": self.timestamp.isoformat(),
            "dataset": self.dataset.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Checkpoint":
        """Deserialize checkpoint from dictionary."""
        from ringsteward.models.tournament.dataset import TournamentDataset

        # older files store the snapshot under "state"
        dataset_data = data.get("dataset", data.get("state", {}))
        return cls(
            id=data["id"],
            name=data["name"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            dataset=TournamentDataset.from_dict(dataset_data),
        )


@dataclass(frozen=True)
class CompetitorChange:
    """One changed field of one competitor."""

    competitor_id: str
    competitor_name: str
    field: str
    old_value: Any
    new_value: Any


@dataclass
class CheckpointDiff:
    """
    Structured difference between a checkpoint and the live dataset.

    Attributes
    ----------
    added : list of Competitor
        Competitors present live but not in the checkpoint.
    removed : list of Competitor
        Competitors present in the checkpoint but not live.
    modified : list of CompetitorChange
        Field-level changes of competitors present in both.
    rings_affected : set of str
        Ring names (``"<Category>_<Pool>"``) touched by any of the above.
    """

    added: List[Competitor] = field(default_factory=list)
    removed: List[Competitor] = field(default_factory=list)
    modified: List[CompetitorChange] = field(default_factory=list)
    rings_affected: Set[str] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        """True when nothing changed."""
        return not (self.added or self.removed or self.modified)

    def changes_for(self, competitor_id: str) -> List[CompetitorChange]:
        """All field changes recorded for one competitor."""
        return [c for c in self.modified if c.competitor_id == competitor_id]
