from typing import List, Optional
from pydantic import Field
from introengine.models.base import IntroEngineModel
from introengine.models.company import Company
from introengine.models.opportunity import Opportunity
from introengine.models.outreach import OutboundResult
from introengine.models.scoring import ScoringResult


class ScoredOpportunity(IntroEngineModel):
    opportunity: Opportunity
    scoring: ScoringResult


class CompanyAnalysis(IntroEngineModel):
    """
    Everything the account can do about one company.

    Either a list of scored intro opportunities, or (when nobody can
    introduce us) a cold outbound draft for `outbound_role`.
    """
    company: Company
    opportunities: List[ScoredOpportunity] = Field(default_factory=list)
    outbound: Optional[OutboundResult] = None
    outbound_role: Optional[str] = None

    @property
    def best_lead_potential(self) -> int:
        scores = [item.scoring.scores.lead_potential_score for item in self.opportunities]
        if self.outbound is not None:
            scores.append(self.outbound.score.lead_potential_score)
        return max(scores, default=0)


class AccountAnalysis(IntroEngineModel):
    companies: List[CompanyAnalysis] = Field(default_factory=list)
