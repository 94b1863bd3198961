from ringsteward.controllers.rings.category_assignment import (
    CategoryDefinition,
    apply_category_ids,
    build_categories,
    pools_needed,
    suggest_definitions,
)
from ringsteward.controllers.rings.cross_event import (
    CrossEventResult,
    count_unassigned_secondary,
    map_secondary_to_primary,
)
from ringsteward.controllers.rings.physical_mapper import (
    PoolUnit,
    auto_assign_physical_rings,
    build_pool_units,
    merge_division_mappings,
    ring_color,
)
from ringsteward.controllers.rings.pool_moves import (
    copy_sparring_from_forms,
    move_to_pool,
    reinstate,
    withdraw,
)
from ringsteward.controllers.rings.ring_assignment import (
    AssignmentResult,
    assign_rings,
    assign_rings_for_all_categories,
)
from ringsteward.controllers.rings.ring_computation import (
    competitors_in_pool,
    compute_rings,
)
from ringsteward.controllers.rings.ring_ordering import (
    name_hash,
    order_forms_pool,
    order_rings,
    order_sparring_pool,
    spread_schools,
)
from ringsteward.controllers.rings.warnings import ValidationWarning, collect_warnings

__all__ = [
    "AssignmentResult",
    "CategoryDefinition",
    "CrossEventResult",
    "PoolUnit",
    "ValidationWarning",
    "apply_category_ids",
    "assign_rings",
    "assign_rings_for_all_categories",
    "auto_assign_physical_rings",
    "build_categories",
    "build_pool_units",
    "collect_warnings",
    "competitors_in_pool",
    "compute_rings",
    "copy_sparring_from_forms",
    "count_unassigned_secondary",
    "map_secondary_to_primary",
    "merge_division_mappings",
    "move_to_pool",
    "name_hash",
    "order_forms_pool",
    "order_rings",
    "order_sparring_pool",
    "pools_needed",
    "reinstate",
    "ring_color",
    "spread_schools",
    "suggest_definitions",
    "withdraw",
]
