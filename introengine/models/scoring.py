from typing import Annotated, List, Optional
from pydantic import BeforeValidator, Field
from introengine.models.base import IntroEngineModel, Identifier, none_as_empty
from introengine.models.company import BuyingSignal
from introengine.models.opportunity import Opportunity, RouteType

Score = Annotated[int, Field(ge=0, le=100)]


class OpportunityRecord(IntroEngineModel):
    """
    Opportunity-like input of the commercial scorer.

    Flat on purpose: it is what storage hands back for an opportunity row,
    and what `from_opportunity` builds from a fresh router result.
    """
    id: Optional[Identifier] = None
    company_id: Identifier = Field(..., min_length=1)
    target_contact_id: Optional[Identifier] = None
    type: Optional[RouteType] = None
    bridge_contact_id: Optional[Identifier] = None
    confidence: Optional[Annotated[float, Field(ge=0, le=100)]] = None
    buying_signals: Annotated[List[BuyingSignal], BeforeValidator(none_as_empty)] = Field(default_factory=list)

    @classmethod
    def from_opportunity(
        cls,
        opportunity: Opportunity,
        buying_signals: Optional[List[BuyingSignal]] = None,
    ) -> "OpportunityRecord":
        route = opportunity.best_route
        return cls(
            company_id=opportunity.company_id,
            target_contact_id=opportunity.target.id,
            type=route.type,
            bridge_contact_id=route.bridge_contact.id if route.bridge_contact else None,
            confidence=route.confidence,
            buying_signals=list(buying_signals or []),
        )


class ScoreSet(IntroEngineModel):
    """Derived scores, recomputed on demand."""
    industry_fit_score: Score
    buying_signal_score: Score
    intro_strength_score: Score
    lead_potential_score: Score


class ScoringResult(IntroEngineModel):
    scores: ScoreSet
    explanation: str
