from ringsteward.models.competitor.competitor import Competitor, EventParticipation
from ringsteward.models.competitor.factory import (
    CompetitorFactory,
    create_competitor,
    create_competitor_from_dict,
)

__all__ = [
    "Competitor",
    "EventParticipation",
    "CompetitorFactory",
    "create_competitor",
    "create_competitor_from_dict",
]
