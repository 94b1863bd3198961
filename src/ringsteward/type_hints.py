"""Type hints used in Ring Steward."""

from typing import Callable, List, Literal, Sequence, Union

# Event type string constants (for runtime use)
FORMS = "forms"
SPARRING = "sparring"

# Basically, forms or sparring
EventType = Literal["forms", "sparring"]

# Sparring pools may be split into two alternate rings
AltRing = Literal["", "a", "b"]

Gender = Literal["male", "female", "mixed"]

# Which events a withdrawal applies to
WithdrawScope = Literal["forms", "sparring", "both"]

# List of competitors
Competitors = List["Competitor"]
# Rings available to a category, or a per-division lookup of them
Resources = Union[Sequence["PhysicalRing"], Callable[[str], Sequence["PhysicalRing"]]]

# Dataset slices that may be replaced wholesale
SliceName = Literal[
    "competitors",
    "categories",
    "category_pool_mappings",
    "physical_ring_mappings",
    "config",
]

#  LocalWords:  AltRing SliceName
