"""
Pydantic models for API request bodies.

Field names follow the public JSON contract (`*_json` suffixes).
Validation failures here surface as 400 responses, see api/main.py.
"""
from typing import Annotated, Any, Dict, List, Optional, Union
from pydantic import BeforeValidator, Field, model_validator
from introengine.models.activity import WeeklyActivity
from introengine.models.base import IntroEngineModel, none_as_empty
from introengine.models.company import BuyingSignal, Company
from introengine.models.contact import Contact, TargetContact
from introengine.models.outreach import FollowupOpportunity, Role
from introengine.models.scoring import OpportunityRecord

Contacts = Annotated[List[Contact], BeforeValidator(none_as_empty)]
Signals = Annotated[List[BuyingSignal], BeforeValidator(none_as_empty)]


class AnalyzeRelationshipsRequest(IntroEngineModel):
    contacts_json: List[Contact] = Field(..., description="The account's known contacts")
    target_contacts_json: List[TargetContact] = Field(..., description="Decision-makers to reach")
    companies_json: List[Company] = Field(..., description="Companies referenced by contacts and targets")


class CalculateScoresRequest(IntroEngineModel):
    company_json: Company
    contacts_json: Contacts = Field(default_factory=list, description="Needed for the bridge bonus")
    opportunity_json: OpportunityRecord

    @model_validator(mode="before")
    @classmethod
    def default_opportunity_company(cls, data: Any) -> Any:
        """An opportunity without company_id belongs to company_json."""
        if not isinstance(data, dict):
            return data
        opportunity = data.get("opportunity_json")
        company = data.get("company_json")
        if isinstance(opportunity, dict) and isinstance(company, dict) and not opportunity.get("company_id"):
            data = {**data, "opportunity_json": {**opportunity, "company_id": company.get("id")}}
        return data


class GenerateOutboundRequest(IntroEngineModel):
    company_json: Company
    role: Union[Role, Annotated[str, Field(min_length=1)]] = Field(
        ..., description="Role title, or {title, seniority}"
    )
    signals_json: Signals = Field(default_factory=list)


class GenerateFollowupsRequest(IntroEngineModel):
    opportunity_json: FollowupOpportunity
    days_waiting: Optional[float] = Field(0, allow_inf_nan=False, description="Clamped to >= 0")


class WeeklyAdvisorRequest(WeeklyActivity):
    """WeeklyActivity counters, either at top level or wrapped in {"activity": {...}}."""

    @model_validator(mode="before")
    @classmethod
    def unwrap_activity(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("activity"), dict):
            return data["activity"]
        return data


class AnalyzeAccountRequest(IntroEngineModel):
    companies_json: List[Company]
    contacts_json: Contacts = Field(default_factory=list)
    # Omitted: targets are the contacts working at each company
    target_contacts_json: Optional[List[TargetContact]] = None
    signals_json: Optional[Dict[str, Signals]] = Field(None, description="company_id -> buying signals")
