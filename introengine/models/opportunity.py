from enum import StrEnum
from typing import Annotated, List, Optional
from pydantic import Field, model_validator
from introengine.models.base import IntroEngineModel, Identifier


class RouteType(StrEnum):
    DIRECT = "direct"
    SECOND_LEVEL = "second_level"
    INFERRED = "inferred"


Confidence = Annotated[int, Field(ge=0, le=100)]


class BridgeContact(IntroEngineModel):
    id: Identifier
    full_name: str


class BestRoute(IntroEngineModel):
    """The strongest known path from the account to one target."""
    type: RouteType
    bridge_contact: Optional[BridgeContact] = None
    confidence: Confidence
    why: str = Field(..., description="Human-readable justification")

    @model_validator(mode="after")
    def check_route_invariants(self) -> "BestRoute":
        if self.type == RouteType.DIRECT and self.confidence < 90:
            raise ValueError("direct routes carry confidence >= 90")
        if self.bridge_contact is None and self.type != RouteType.INFERRED:
            raise ValueError(f"{self.type} routes require a bridge contact")
        return self


class TargetSummary(IntroEngineModel):
    id: Identifier
    full_name: str
    role_title: str
    seniority: str


class OpportunityScore(IntroEngineModel):
    intro_strength_score: Confidence


class Opportunity(IntroEngineModel):
    """A routed intro opportunity for one (company, target) pair."""
    company_id: Identifier
    target: TargetSummary
    best_route: BestRoute
    suggested_intro_message: str
    score: OpportunityScore

    @property
    def intro_strength_score(self) -> int:
        return self.score.intro_strength_score


class AnalysisResult(IntroEngineModel):
    opportunities: List[Opportunity] = Field(default_factory=list)
