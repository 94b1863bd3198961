from ringsteward.models.tournament.category import Category
from ringsteward.models.tournament.checkpoint import (
    Checkpoint,
    CheckpointDiff,
    CompetitorChange,
)
from ringsteward.models.tournament.competition_ring import CompetitionRing, ring_id
from ringsteward.models.tournament.dataset import TournamentDataset
from ringsteward.models.tournament.mappings import (
    CategoryPoolMapping,
    PhysicalRingMapping,
)
from ringsteward.models.tournament.tournament_config import (
    Division,
    PhysicalRing,
    TournamentConfig,
    default_physical_ring,
)

__all__ = [
    "Category",
    "CategoryPoolMapping",
    "Checkpoint",
    "CheckpointDiff",
    "CompetitionRing",
    "CompetitorChange",
    "Division",
    "PhysicalRing",
    "PhysicalRingMapping",
    "TournamentConfig",
    "TournamentDataset",
    "default_physical_ring",
    "ring_id",
]
