from ringsteward.models.competitor import Competitor, EventParticipation
from ringsteward.models.tournament import (
    Category,
    CategoryPoolMapping,
    Checkpoint,
    CheckpointDiff,
    CompetitionRing,
    CompetitorChange,
    Division,
    PhysicalRing,
    PhysicalRingMapping,
    TournamentConfig,
    TournamentDataset,
)

__all__ = [
    "Category",
    "CategoryPoolMapping",
    "Checkpoint",
    "CheckpointDiff",
    "CompetitionRing",
    "Competitor",
    "CompetitorChange",
    "Division",
    "EventParticipation",
    "PhysicalRing",
    "PhysicalRingMapping",
    "TournamentConfig",
    "TournamentDataset",
]
