"""
Weekly Advisor Endpoints

Weekly digest: summary, insights and recommended actions.
"""
from fastapi import APIRouter

from introengine.api.models.requests import WeeklyAdvisorRequest
from introengine.models.activity import WeeklyAdvisorResult
from introengine.services.weekly_advisor import get_weekly_advisor
from introengine.utils.metrics import metrics

router = APIRouter(prefix="/api", tags=["Weekly Advisor"])


@router.post("/weekly-advisor", response_model=WeeklyAdvisorResult)
async def weekly_advisor(request: WeeklyAdvisorRequest):
    """Always returns exactly 3 insights and 3 recommended actions."""
    with metrics.time_engine("weekly_advisor"):
        return get_weekly_advisor().analyze(request)


@router.get("/weekly-advisor")
async def weekly_advisor_usage():
    """Usage information for the weekly advisor."""
    return {
        "message": "Weekly Advisor de IntroEngine",
        "usage": {
            "method": "POST",
            "endpoint": "/api/weekly-advisor",
            "body": {
                "intros_generated": "number",
                "intros_requested": "number",
                "intro_responses": "number",
                "outbound_suggested": "number",
                "outbound_executed": "number",
                "wins": "number",
                "losses": "number",
                "opportunities_created": "number",
                "industries_performance": "Array de {industry, opportunities, responses, wins, conversion_rate}",
                "stalled_opportunities": "number (opcional)"
            },
            "note": "También acepta los mismos campos dentro de {\"activity\": {...}}",
            "response": {
                "summary": "Resumen legible de las métricas",
                "insights": "Exactamente 3 insights",
                "recommended_actions": "Exactamente 3 acciones recomendadas"
            }
        }
    }
