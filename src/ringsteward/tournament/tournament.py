"""Main Tournament class - owns the dataset and orchestrates every change.

This is the primary interface for ring assignment, coordinating the pure
assignment functions with the checkpoint and undo managers. Every mutation
computes new dataset slices first and swaps them in through ``_commit``, so
an exception leaves the dataset untouched.
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

from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Sequence

from ringsteward.controllers.history import CheckpointManager, UndoManager
from ringsteward.controllers.rings import (
    AssignmentResult,
    CategoryDefinition,
    CrossEventResult,
    ValidationWarning,
    apply_category_ids,
    assign_rings,
    assign_rings_for_all_categories,
    auto_assign_physical_rings,
    build_categories,
    build_pool_units,
    collect_warnings,
    compute_rings,
    copy_sparring_from_forms,
    count_unassigned_secondary,
    map_secondary_to_primary,
    merge_division_mappings,
    move_to_pool,
    order_forms_pool,
    order_rings,
    order_sparring_pool,
    reinstate,
    ring_color,
    withdraw,
)
from ringsteward.exceptions import (
    DuplicateCompetitorException,
    InvalidCategoryException,
)
from ringsteward.models.competitor import Competitor
from ringsteward.models.tournament import (
    Category,
    Checkpoint,
    CheckpointDiff,
    CompetitionRing,
    PhysicalRingMapping,
    TournamentDataset,
)
from ringsteward.type_hints import FORMS, SPARRING, EventType, SliceName, WithdrawScope
from ringsteward.utils import setup_logger
from ringsteward.utils.validation import (
    parse_pool_number,
    validate_alt_ring_strict,
    validate_num_pools,
    validate_pool_strict,
)

logger = setup_logger(__name__)

SLICE_NAMES = (
    "competitors",
    "categories",
    "category_pool_mappings",
    "physical_ring_mappings",
    "config",
)

# Change events passed to subscribers besides the slice names
EVENT_DATASET = "dataset"
EVENT_CHECKPOINTS = "checkpoints"
EVENT_HISTORY = "history"

Subscriber = Callable[[str], None]


class Tournament:
    """Tournament dataset owner.

    This class coordinates all operations on one dataset:
    - ring assignment, cross-event mapping and physical ring mapping
    - manual pool moves, withdrawals and reinstatements
    - checkpoints, diffs and undo/redo

    Subscribers registered with :meth:`subscribe` are called with the name
    of what changed after every commit.
    """

    def __init__(
        self,
        dataset: Optional[TournamentDataset] = None,
        checkpoints: Optional[Sequence[Checkpoint]] = None,
    ) -> None:
        """Initialize a tournament.

        Args:
            dataset: Initial dataset; a new empty one when omitted
            checkpoints: Previously saved checkpoints
        """
        self._dataset = dataset if dataset is not None else TournamentDataset()
        self._revision = 0
        self._rings_cache: Optional[List[CompetitionRing]] = None
        self._rings_revision = -1
        self._subscribers: List[Subscriber] = []

        self.checkpoint_manager = CheckpointManager(checkpoints)
        self.undo_manager = UndoManager(self._dataset.config.history_depth)

    # ========== Properties ==========

    @property
    def dataset(self) -> TournamentDataset:
        """The live dataset. Treat as read-only; change it through this class."""
        return self._dataset

    @property
    def name(self) -> str:
        return self._dataset.config.name

    @property
    def revision(self) -> int:
        """Incremented on every committed change."""
        return self._revision

    @property
    def competitors(self) -> List[Competitor]:
        return self._dataset.competitors

    @property
    def categories(self) -> List[Category]:
        return self._dataset.categories

    @property
    def rings(self) -> List[CompetitionRing]:
        """Competition rings of the current revision, computed on demand."""
        if self._rings_cache is None or self._rings_revision != self._revision:
            self._rings_cache = compute_rings(
                self._dataset.competitors,
                self._dataset.categories,
                self._dataset.category_pool_mappings,
            )
            self._rings_revision = self._revision
        return list(self._rings_cache)

    @property
    def checkpoints(self) -> List[Checkpoint]:
        return self.checkpoint_manager.checkpoints

    @property
    def can_undo(self) -> bool:
        return self.undo_manager.can_undo

    @property
    def can_redo(self) -> bool:
        return self.undo_manager.can_redo

    # ========== Change Notification ==========

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change callback.

        Args:
            callback: Called with the name of the changed slice, or
                ``"dataset"``, ``"checkpoints"`` or ``"history"``

        Returns:
            Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, event: str) -> None:
        for callback in list(self._subscribers):
            callback(event)

    def _commit(self, event: str, record: bool = True, **slices: Any) -> None:
        """Swap new slices into the dataset, recording undo history first."""
        unknown = set(slices) - set(SLICE_NAMES)
        if unknown:
            raise ValueError(f"Unknown dataset slice(s): {', '.join(sorted(unknown))}")
        if record:
            self.undo_manager.record(self._dataset)
        self._dataset = replace(self._dataset, **slices)
        self._revision += 1
        self.undo_manager.resize(self._dataset.config.history_depth)
        self._notify(event)

    def _restore(self, dataset: TournamentDataset, event: str) -> None:
        self._dataset = dataset
        self._revision += 1
        self.undo_manager.resize(self._dataset.config.history_depth)
        self._notify(event)

    def replace_slice(self, name: SliceName, value: Any) -> None:
        """Replace one slice of the dataset wholesale.

        Args:
            name: One of competitors, categories, category_pool_mappings,
                physical_ring_mappings or config
            value: New value for the slice

        Raises:
            ValueError: If ``name`` is not a dataset slice
        """
        if name not in SLICE_NAMES:
            raise ValueError(f"Unknown dataset slice: {name}")
        if isinstance(value, (list, tuple)):
            value = list(value)
        self._commit(name, **{name: value})
        logger.info(f"Replaced {name}")

    # ========== Competitor Management ==========

    def get_competitor(self, competitor_id: str) -> Optional[Competitor]:
        return self._dataset.get_competitor(competitor_id)

    def add_competitor(self, competitor: Competitor) -> None:
        """Add a competitor.

        Raises:
            DuplicateCompetitorException: If the id is already in use
        """
        if self.get_competitor(competitor.id) is not None:
            raise DuplicateCompetitorException(
                f"Competitor {competitor.id} already exists"
            )
        self._commit("competitors", competitors=self.competitors + [competitor])
        logger.info(f"Added competitor: {competitor.name} ({competitor.id})")

    def add_competitors(self, competitors: Sequence[Competitor]) -> None:
        """Add several competitors as one undoable change."""
        existing = {c.id for c in self.competitors}
        for competitor in competitors:
            if competitor.id in existing:
                raise DuplicateCompetitorException(
                    f"Competitor {competitor.id} already exists"
                )
            existing.add(competitor.id)
        self._commit("competitors", competitors=self.competitors + list(competitors))
        logger.info(f"Added {len(competitors)} competitor(s)")

    def update_competitor(self, competitor: Competitor) -> bool:
        """Replace the competitor with the same id.

        Returns:
            True if updated, False if not found
        """
        if self.get_competitor(competitor.id) is None:
            logger.warning(f"Competitor {competitor.id} not found, not updated")
            return False
        self._commit(
            "competitors",
            competitors=[competitor if c.id == competitor.id else c for c in self.competitors],
        )
        logger.info(f"Updated competitor: {competitor.name} ({competitor.id})")
        return True

    def remove_competitor(self, competitor_id: str) -> bool:
        """Remove a competitor and drop them from every category.

        Returns:
            True if removed, False if not found
        """
        competitor = self.get_competitor(competitor_id)
        if competitor is None:
            logger.warning(f"Competitor {competitor_id} not found, not removed")
            return False
        categories = [
            replace(c, competitor_ids=[i for i in c.competitor_ids if i != competitor_id])
            if competitor_id in c.competitor_ids
            else c
            for c in self.categories
        ]
        self._commit(
            "competitors",
            competitors=[c for c in self.competitors if c.id != competitor_id],
            categories=categories,
        )
        logger.info(f"Removed competitor: {competitor.name} ({competitor_id})")
        return True

    # ========== Category Management ==========

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._dataset.get_category(category_id)

    def _check_category(self, category: Category) -> None:
        result = validate_num_pools(category.num_pools)
        if not result.is_valid:
            raise InvalidCategoryException(result.error_message)

    def add_category(self, category: Category) -> None:
        """Add a category.

        Raises:
            InvalidCategoryException: If the id is taken or the pool count invalid
        """
        self._check_category(category)
        if self.get_category(category.id) is not None:
            raise InvalidCategoryException(f"Category {category.id} already exists")
        self._commit("categories", categories=self.categories + [category])
        logger.info(f"Added category: {category.name} ({category.division})")

    def update_category(self, category: Category) -> bool:
        """Replace the category with the same id.

        Members placed in a pool beyond the new pool count lose their pool
        and running order, and the mappings of those pools are dropped.

        Returns:
            True if updated, False if not found
        """
        self._check_category(category)
        if self.get_category(category.id) is None:
            logger.warning(f"Category {category.id} not found, not updated")
            return False

        def out_of_range(category_id: Optional[str], pool: Optional[str]) -> bool:
            if category_id != category.id or not pool:
                return False
            number = parse_pool_number(pool)
            return number is None or number > category.num_pools

        competitors = []
        for competitor in self.competitors:
            for event_type in (FORMS, SPARRING):
                entry = competitor.participation(event_type)
                if out_of_range(entry.category_id, entry.pool):
                    competitor = competitor.with_participation(
                        event_type, pool=None, rank_order=None
                    )
            competitors.append(competitor)
        self._commit(
            "categories",
            competitors=competitors,
            categories=[category if c.id == category.id else c for c in self.categories],
            category_pool_mappings=[
                m
                for m in self._dataset.category_pool_mappings
                if not out_of_range(m.category_id, m.pool)
            ],
        )
        logger.info(f"Updated category: {category.name}")
        return True

    def remove_category(self, category_id: str) -> bool:
        """Remove a category and clear every reference to it.

        Competitors placed in the category lose their category and pool, and
        the category's pool mappings are dropped.

        Returns:
            True if removed, False if not found
        """
        category = self.get_category(category_id)
        if category is None:
            logger.warning(f"Category {category_id} not found, not removed")
            return False
        self._commit(
            "categories",
            competitors=_clear_category_refs(self.competitors, {category_id}),
            categories=[c for c in self.categories if c.id != category_id],
            category_pool_mappings=[
                m for m in self._dataset.category_pool_mappings if m.category_id != category_id
            ],
        )
        logger.info(f"Removed category: {category.name}")
        return True

    def generate_categories(
        self,
        definitions: Sequence[CategoryDefinition],
        event_type: EventType = FORMS,
    ) -> List[Category]:
        """Rebuild the categories of the divisions the definitions cover.

        Existing categories of the same event type in those divisions are
        replaced; their members are pointed at the new categories.

        Returns:
            The new categories
        """
        built = build_categories(self.competitors, definitions, event_type)
        divisions = {d.division for d in definitions}
        removed = {
            c.id for c in self.categories if c.event_type == event_type and c.division in divisions
        }
        competitors = _clear_category_refs(self.competitors, removed)
        competitors = apply_category_ids(competitors, built, event_type)
        self._commit(
            "categories",
            competitors=competitors,
            categories=[c for c in self.categories if c.id not in removed] + built,
            category_pool_mappings=[
                m for m in self._dataset.category_pool_mappings if m.category_id not in removed
            ],
        )
        return built

    # ========== Ring Assignment ==========

    def assign_rings(
        self,
        event_type: EventType = FORMS,
        division: Optional[str] = None,
        order: bool = True,
    ) -> AssignmentResult:
        """Distribute every category of an event type over its pools.

        Each division uses its own configured physical rings. The produced
        pools replace the category pool mappings of the assigned categories.

        Args:
            event_type: Event to assign
            division: Restrict to one division
            order: Also assign running orders within every produced pool

        Returns:
            AssignmentResult of the whole run

        Raises:
            CapacityException: If a category needs more rings than its
                division has; nothing is changed
        """
        result = assign_rings_for_all_categories(
            self.categories,
            self.competitors,
            self._dataset.config.resources_for_division,
            event_type,
            division,
        )
        assigned = {
            c.id
            for c in self.categories
            if c.event_type == event_type and (division is None or c.division == division)
        }
        self._apply_assignment(result, assigned, order)
        logger.info(
            f"Assigned {event_type} rings"
            + (f" for {division}" if division else "")
            + f": {len(result.rings)} ring(s)"
        )
        return result

    def assign_category(self, category_id: str, order: bool = True) -> Optional[AssignmentResult]:
        """Assign one category to its pools.

        Returns:
            AssignmentResult, or None if the category does not exist
        """
        category = self.get_category(category_id)
        if category is None:
            logger.warning(f"Category {category_id} not found, nothing assigned")
            return None
        result = assign_rings(
            category,
            self.competitors,
            self._dataset.config.resources_for_division(category.division),
        )
        self._apply_assignment(result, {category_id}, order)
        return result

    def _apply_assignment(
        self, result: AssignmentResult, category_ids: set, order: bool
    ) -> None:
        competitors = result.updated_competitors
        if order:
            competitors = order_rings(competitors, result.rings)
        mappings = [
            m for m in self._dataset.category_pool_mappings if m.category_id not in category_ids
        ] + result.pool_mappings()
        self._commit(
            "competitors",
            competitors=competitors,
            category_pool_mappings=mappings,
        )

    def map_sparring_to_forms(
        self, division: Optional[str] = None, order: bool = True
    ) -> CrossEventResult:
        """Place sparring competitors in the physical ring of their forms pool.

        Args:
            division: Restrict to forms rings of one division
            order: Also order the produced sparring pools by height

        Returns:
            CrossEventResult of the mapping
        """
        primary = [
            r
            for r in self.rings
            if r.event_type == FORMS and (division is None or r.division == division)
        ]
        result = map_secondary_to_primary(self.categories, self.competitors, primary)

        unassigned = count_unassigned_secondary(self.competitors)
        if unassigned:
            logger.warning(
                f"{unassigned} sparring competitor(s) have no sparring category "
                f"or forms pool and were not mapped"
            )

        competitors = result.updated_competitors
        if order:
            competitors = order_rings(competitors, result.secondary_rings)
        produced = {m.key for m in result.pool_mappings()}
        mappings = [
            m for m in self._dataset.category_pool_mappings if m.key not in produced
        ] + result.pool_mappings()
        self._commit(
            "competitors",
            competitors=competitors,
            category_pool_mappings=mappings,
        )
        return result

    # ========== Physical Ring Mapping ==========

    def auto_assign_physical_rings(
        self,
        division: Optional[str] = None,
        resource_count: Optional[int] = None,
    ) -> List[PhysicalRingMapping]:
        """Label every forms pool with a physical ring, youngest first.

        Replaces the physical ring mappings of ``division`` (or all of them
        when no division is given), discarding manual overrides there.

        Args:
            division: Division to map
            resource_count: Number of physical rings; defaults to the
                division's ring count, or the venue's when no division is given

        Returns:
            The new mappings

        Raises:
            CapacityException: If pools exist but no physical ring does
        """
        if resource_count is None:
            config = self._dataset.config
            resource_count = (
                config.ring_count(division) if division else config.venue_ring_count()
            )
        forms_rings = [r for r in self.rings if r.event_type == FORMS]
        units = build_pool_units(forms_rings, self.categories, division)
        mappings = auto_assign_physical_rings(units, resource_count)
        self._commit(
            "physical_ring_mappings",
            physical_ring_mappings=merge_division_mappings(
                self._dataset.physical_ring_mappings, mappings, division
            ),
        )
        return mappings

    def get_physical_ring_name(self, category_name: str, pool: str) -> Optional[str]:
        for mapping in self._dataset.physical_ring_mappings:
            if mapping.key == (category_name, pool):
                return mapping.physical_ring_name
        return None

    def update_physical_ring_mapping(
        self, category_name: str, pool: str, physical_ring_name: str
    ) -> bool:
        """Manually relabel one pool's physical ring.

        The override holds until the next auto-assign of its division.

        Returns:
            True if updated, False if the pool has no mapping
        """
        found = False
        mappings = []
        for mapping in self._dataset.physical_ring_mappings:
            if mapping.key == (category_name, pool):
                found = True
                mapping = replace(
                    mapping,
                    physical_ring_name=physical_ring_name,
                    color=ring_color(physical_ring_name),
                )
            mappings.append(mapping)
        if not found:
            logger.warning(f"No physical ring mapping for {category_name}_{pool}")
            return False
        self._commit("physical_ring_mappings", physical_ring_mappings=mappings)
        logger.info(f"Mapped {category_name}_{pool} to {physical_ring_name}")
        return True

    # ========== Pool Moves ==========

    def move_competitor(
        self,
        competitor_id: str,
        event_type: EventType,
        category_id: Optional[str],
        pool: Optional[str],
    ) -> bool:
        """Move a competitor to another pool, or clear their pool with ``None``.

        Returns:
            True if moved, False if the competitor or category is unknown

        Raises:
            InvalidPoolException: If the pool lies outside the category's pools
        """
        if self.get_competitor(competitor_id) is None:
            logger.warning(f"Competitor {competitor_id} not found, not moved")
            return False
        if category_id is not None:
            category = self.get_category(category_id)
            if category is None:
                logger.warning(f"Category {category_id} not found, not moved")
                return False
            if pool is not None:
                validate_pool_strict(pool, category.num_pools)
        self._commit(
            "competitors",
            competitors=move_to_pool(self.competitors, competitor_id, event_type, category_id, pool),
        )
        return True

    def withdraw_competitor(self, competitor_id: str, scope: WithdrawScope = "both") -> bool:
        """Withdraw a competitor from forms, sparring or both.

        Returns:
            True if withdrawn, False if not found
        """
        if self.get_competitor(competitor_id) is None:
            logger.warning(f"Competitor {competitor_id} not found, not withdrawn")
            return False
        self._commit("competitors", competitors=withdraw(self.competitors, competitor_id, scope))
        return True

    def reinstate_competitor(
        self, competitor_id: str, event_type: EventType, division: str
    ) -> bool:
        """Return a withdrawn competitor to the pool they last held.

        Returns:
            True if reinstated, False if not found
        """
        if self.get_competitor(competitor_id) is None:
            logger.warning(f"Competitor {competitor_id} not found, not reinstated")
            return False
        self._commit(
            "competitors",
            competitors=reinstate(
                self.competitors, competitor_id, event_type, division, self.categories
            ),
        )
        return True

    def copy_sparring_from_forms(self, competitor_id: str) -> bool:
        """Copy a competitor's forms placement to sparring once.

        Returns:
            True if copied, False if not found
        """
        if self.get_competitor(competitor_id) is None:
            logger.warning(f"Competitor {competitor_id} not found, nothing copied")
            return False
        self._commit(
            "competitors",
            competitors=copy_sparring_from_forms(self.competitors, competitor_id),
        )
        return True

    def set_alt_ring(self, competitor_id: str, alt_ring: str) -> bool:
        """Put a sparring competitor in alternate ring ``a`` or ``b`` (or none).

        Returns:
            True if set, False if not found

        Raises:
            AltRingValidationException: If the tag is not '', 'a' or 'b'
        """
        value = validate_alt_ring_strict(alt_ring)
        competitor = self.get_competitor(competitor_id)
        if competitor is None:
            logger.warning(f"Competitor {competitor_id} not found")
            return False
        updated = competitor.with_participation(SPARRING, alt_ring=value)
        self._commit(
            "competitors",
            competitors=[updated if c.id == competitor_id else c for c in self.competitors],
        )
        return True

    def order_pool(self, category_id: str, pool: str, event_type: EventType = FORMS) -> bool:
        """Recompute the running order of one pool.

        Returns:
            True if ordered, False if the category is unknown
        """
        if self.get_category(category_id) is None:
            logger.warning(f"Category {category_id} not found, not ordered")
            return False
        if event_type == FORMS:
            competitors = order_forms_pool(self.competitors, category_id, pool)
        else:
            competitors = order_sparring_pool(self.competitors, category_id, pool)
        self._commit("competitors", competitors=competitors)
        return True

    def warnings(self) -> List[ValidationWarning]:
        """Warnings about the current dataset."""
        return collect_warnings(self._dataset)

    # ========== Checkpoints ==========

    def create_checkpoint(self, name: Optional[str] = None) -> Checkpoint:
        checkpoint = self.checkpoint_manager.create(self._dataset, name)
        self._notify(EVENT_CHECKPOINTS)
        return checkpoint

    def diff_checkpoint(self, checkpoint_id: str) -> Optional[CheckpointDiff]:
        """Difference between a checkpoint and the live dataset, or None if unknown."""
        return self.checkpoint_manager.diff(checkpoint_id, self._dataset)

    def load_checkpoint(self, checkpoint_id: str) -> bool:
        """Replace the whole live dataset with a checkpoint's copy.

        The replacement can be undone.

        Returns:
            True if loaded, False if the checkpoint does not exist
        """
        dataset = self.checkpoint_manager.load(checkpoint_id)
        if dataset is None:
            return False
        self.undo_manager.record(self._dataset)
        self._restore(dataset, EVENT_DATASET)
        return True

    def rename_checkpoint(self, checkpoint_id: str, name: str) -> bool:
        renamed = self.checkpoint_manager.rename(checkpoint_id, name)
        if renamed:
            self._notify(EVENT_CHECKPOINTS)
        return renamed

    def delete_checkpoint(self, checkpoint_id: str) -> bool:
        deleted = self.checkpoint_manager.delete(checkpoint_id)
        if deleted:
            self._notify(EVENT_CHECKPOINTS)
        return deleted

    # ========== Undo/Redo ==========

    def undo(self) -> bool:
        """Revert the last change.

        Returns:
            True if a change was undone, False if there was none
        """
        dataset = self.undo_manager.undo(self._dataset)
        if dataset is None:
            return False
        self._restore(dataset, EVENT_HISTORY)
        logger.info("Undo")
        return True

    def redo(self) -> bool:
        """Re-apply the last undone change.

        Returns:
            True if a change was redone, False if there was none
        """
        dataset = self.undo_manager.redo(self._dataset)
        if dataset is None:
            return False
        self._restore(dataset, EVENT_HISTORY)
        logger.info("Redo")
        return True

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the dataset and its checkpoints.

        Undo history is not saved.
        """
        return {
            "dataset": self._dataset.to_dict(),
            "checkpoints": self.checkpoint_manager.to_dict()["checkpoints"],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize a tournament.

        A bare dataset dictionary (top-level ``competitors``) is accepted too.
        """
        dataset_data = data.get("dataset", data)
        checkpoints = CheckpointManager.from_dict(data).checkpoints
        tournament = cls(TournamentDataset.from_dict(dataset_data), checkpoints)
        logger.info(
            f"Loaded tournament with {len(tournament.competitors)} competitor(s) "
            f"and {len(checkpoints)} checkpoint(s)"
        )
        return tournament


def _clear_category_refs(
    competitors: Sequence[Competitor], category_ids: set
) -> List[Competitor]:
    """Clear category and pool of every entry pointing at the given categories."""
    result = []
    for competitor in competitors:
        for event_type in (FORMS, SPARRING):
            if competitor.participation(event_type).category_id in category_ids:
                competitor = competitor.with_participation(
                    event_type, category_id=None, pool=None, rank_order=None
                )
        result.append(competitor)
    return result
