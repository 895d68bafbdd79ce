"""
Scoring Endpoints

Commercial scores for one opportunity.
"""
from fastapi import APIRouter

from introengine.api.models.requests import CalculateScoresRequest
from introengine.models.scoring import ScoringResult
from introengine.services.commercial_scorer import get_commercial_scorer
from introengine.utils.metrics import metrics

router = APIRouter(prefix="/api", tags=["Scoring"])


@router.post("/calculate-scores", response_model=ScoringResult)
async def calculate_scores(request: CalculateScoresRequest):
    """Industry fit, buying signal, intro strength and lead potential (0-100)."""
    with metrics.time_engine("commercial_scorer"):
        return get_commercial_scorer().score(
            request.company_json,
            request.contacts_json,
            request.opportunity_json,
        )


@router.get("/calculate-scores")
async def calculate_scores_usage():
    """Usage information for the commercial scorer."""
    return {
        "message": "Motor de scoring comercial de IntroEngine",
        "usage": {
            "method": "POST",
            "endpoint": "/api/calculate-scores",
            "body": {
                "company_json": "Objeto Company con id, name, industry, size_bucket, etc.",
                "contacts_json": "Array de Contact (opcional, necesario para intro_strength_score)",
                "opportunity_json": "Objeto Opportunity con company_id, type, bridge_contact_id, confidence, buying_signals"
            },
            "response": {
                "scores": {
                    "industry_fit_score": "0-100",
                    "buying_signal_score": "0-100",
                    "intro_strength_score": "0-100",
                    "lead_potential_score": "0-100"
                },
                "explanation": "Explicación breve del score"
            }
        }
    }
