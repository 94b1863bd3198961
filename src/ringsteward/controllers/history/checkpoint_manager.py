"""Named checkpoints of the whole dataset and diffs against them.

This module owns the checkpoint list: creating, renaming, deleting and
loading checkpoints, and comparing a checkpoint with the live dataset.
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

import copy
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from ringsteward.models.competitor import Competitor
from ringsteward.models.tournament import (
    Category,
    Checkpoint,
    CheckpointDiff,
    CompetitorChange,
    TournamentDataset,
)
from ringsteward.type_hints import FORMS, SPARRING
from ringsteward.utils import setup_logger

logger = setup_logger(__name__)

CHECKPOINT_NAME_FORMAT = "Checkpoint %Y-%m-%d %H:%M:%S"

# Flat competitor fields compared by a diff
TRACKED_FIELDS = (
    "first_name",
    "last_name",
    "forms_division",
    "sparring_division",
    "competing_forms",
    "competing_sparring",
    "forms_category_id",
    "sparring_category_id",
    "forms_pool",
    "sparring_pool",
    "forms_rank_order",
    "sparring_rank_order",
    "sparring_alt_ring",
    "age",
    "gender",
    "height_feet",
    "height_inches",
    "school",
    "branch",
)

# Changes to these fields move a competitor between rings
FORMS_RING_FIELDS = ("forms_category_id", "forms_pool")
SPARRING_RING_FIELDS = ("sparring_category_id", "sparring_pool", "sparring_alt_ring")


def ring_name_for(
    competitor: Competitor, event_type: str, categories_by_id: Dict[str, Category]
) -> Optional[str]:
    """Ring name a competitor occupies in one event, if placed.

    Sparring names carry the alternate ring as ``_a``/``_b``.
    """
    entry = competitor.participation(event_type)
    if not entry.category_id or not entry.pool:
        return None
    category = categories_by_id.get(entry.category_id)
    if category is None:
        return None
    name = category.pool_name(entry.pool)
    if event_type == SPARRING and entry.alt_ring:
        name = f"{name}_{entry.alt_ring}"
    return name


def _collect_rings(
    target: Set[str],
    competitor: Competitor,
    categories_by_id: Dict[str, Category],
    events: Iterable[str] = (FORMS, SPARRING),
) -> None:
    for event_type in events:
        name = ring_name_for(competitor, event_type, categories_by_id)
        if name:
            target.add(name)


def diff_datasets(old: TournamentDataset, new: TournamentDataset) -> CheckpointDiff:
    """Compare the competitors of two datasets. Neither side is modified.

    Args:
        old: Dataset of the checkpoint
        new: Live dataset

    Returns:
        CheckpointDiff of added, removed and modified competitors
    """
    old_by_id = {c.id: c for c in old.competitors}
    new_by_id = {c.id: c for c in new.competitors}
    old_categories = {c.id: c for c in old.categories}
    new_categories = {c.id: c for c in new.categories}

    diff = CheckpointDiff()
    for competitor in new.competitors:
        if competitor.id not in old_by_id:
            diff.added.append(copy.deepcopy(competitor))
            _collect_rings(diff.rings_affected, competitor, new_categories)
    for competitor in old.competitors:
        if competitor.id not in new_by_id:
            diff.removed.append(copy.deepcopy(competitor))
            _collect_rings(diff.rings_affected, competitor, old_categories)

    for competitor in new.competitors:
        previous = old_by_id.get(competitor.id)
        if previous is None:
            continue
        before, after = previous.to_dict(), competitor.to_dict()
        changed_events = set()
        for field_name in TRACKED_FIELDS:
            if before.get(field_name) == after.get(field_name):
                continue
            diff.modified.append(
                CompetitorChange(
                    competitor_id=competitor.id,
                    competitor_name=competitor.name,
                    field=field_name,
                    old_value=before.get(field_name),
                    new_value=after.get(field_name),
                )
            )
            if field_name in FORMS_RING_FIELDS:
                changed_events.add(FORMS)
            elif field_name in SPARRING_RING_FIELDS:
                changed_events.add(SPARRING)
        if changed_events:
            _collect_rings(diff.rings_affected, previous, old_categories, changed_events)
            _collect_rings(diff.rings_affected, competitor, new_categories, changed_events)
    return diff


class CheckpointManager:
    """Keeps checkpoints in creation order.

    Checkpoints own a deep copy of the dataset they were taken from and are
    never modified in place; renaming replaces the checkpoint value.
    """

    def __init__(self, checkpoints: Optional[Sequence[Checkpoint]] = None):
        self._checkpoints: List[Checkpoint] = list(checkpoints or [])

    @property
    def checkpoints(self) -> List[Checkpoint]:
        """Checkpoints in creation order."""
        return list(self._checkpoints)

    def __len__(self) -> int:
        return len(self._checkpoints)

    def get(self, checkpoint_id: str) -> Optional[Checkpoint]:
        for checkpoint in self._checkpoints:
            if checkpoint.id == checkpoint_id:
                return checkpoint
        return None

    def create(
        self, dataset: TournamentDataset, name: Optional[str] = None
    ) -> Checkpoint:
        """Snapshot the dataset.

        Args:
            dataset: Dataset to copy
            name: Display name; defaults to the creation time

        Returns:
            The new checkpoint
        """
        timestamp = datetime.now()
        checkpoint = Checkpoint(
            id=str(uuid.uuid4()),
            name=name or timestamp.strftime(CHECKPOINT_NAME_FORMAT),
            timestamp=timestamp,
            dataset=dataset.clone(),
        )
        self._checkpoints.append(checkpoint)
        logger.info(f"Created checkpoint '{checkpoint.name}'")
        return checkpoint

    def diff(
        self, checkpoint_id: str, dataset: TournamentDataset
    ) -> Optional[CheckpointDiff]:
        """Compare a checkpoint with the given dataset.

        Returns:
            CheckpointDiff, or None if the checkpoint does not exist
        """
        checkpoint = self.get(checkpoint_id)
        if checkpoint is None:
            logger.warning(f"Checkpoint {checkpoint_id} not found")
            return None
        return diff_datasets(checkpoint.dataset, dataset)

    def load(self, checkpoint_id: str) -> Optional[TournamentDataset]:
        """Independent copy of a checkpoint's dataset, or None if unknown."""
        checkpoint = self.get(checkpoint_id)
        if checkpoint is None:
            logger.warning(f"Checkpoint {checkpoint_id} not found, nothing loaded")
            return None
        logger.info(f"Loading checkpoint '{checkpoint.name}'")
        return checkpoint.dataset.clone()

    def rename(self, checkpoint_id: str, name: str) -> bool:
        """Rename a checkpoint.

        Returns:
            True if renamed, False if the checkpoint does not exist
        """
        for index, checkpoint in enumerate(self._checkpoints):
            if checkpoint.id == checkpoint_id:
                self._checkpoints[index] = replace(checkpoint, name=name)
                logger.info(f"Renamed checkpoint '{checkpoint.name}' to '{name}'")
                return True
        logger.warning(f"Checkpoint {checkpoint_id} not found, not renamed")
        return False

    def delete(self, checkpoint_id: str) -> bool:
        """Delete a checkpoint.

        Returns:
            True if deleted, False if the checkpoint does not exist
        """
        checkpoint = self.get(checkpoint_id)
        if checkpoint is None:
            logger.warning(f"Checkpoint {checkpoint_id} not found, not deleted")
            return False
        self._checkpoints.remove(checkpoint)
        logger.info(f"Deleted checkpoint '{checkpoint.name}'")
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"checkpoints": [c.to_dict() for c in self._checkpoints]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CheckpointManager":
        return cls([Checkpoint.from_dict(c) for c in data.get("checkpoints", [])])
