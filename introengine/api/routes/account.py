"""
Account Endpoints

Runs routing, scoring and outbound fallback across an account's companies.
"""
from fastapi import APIRouter

from introengine.api.models.requests import AnalyzeAccountRequest
from introengine.core.intro_pipeline import get_intro_pipeline
from introengine.models.account import AccountAnalysis

router = APIRouter(prefix="/api", tags=["Account"])


@router.post("/analyze-account", response_model=AccountAnalysis)
async def analyze_account(request: AnalyzeAccountRequest):
    """
    Analyze every company, most promising first.

    Companies with a viable route get scored intro opportunities; the rest
    get an outbound draft for a default decision-maker role.
    """
    return get_intro_pipeline().analyze_account(
        request.companies_json,
        request.contacts_json,
        targets=request.target_contacts_json,
        signals_by_company=request.signals_json or {},
    )


@router.get("/analyze-account")
async def analyze_account_usage():
    """Usage information for the account pipeline."""
    return {
        "message": "Análisis de cuenta de IntroEngine",
        "usage": {
            "method": "POST",
            "endpoint": "/api/analyze-account",
            "body": {
                "companies_json": "Array de empresas a analizar",
                "contacts_json": "Array de contactos del usuario",
                "target_contacts_json": "Array de contactos objetivo (opcional: si falta, se toman de contacts_json por empresa)",
                "signals_json": "Objeto company_id -> Array de BuyingSignal (opcional)"
            },
            "response": {
                "companies": "Array de análisis por empresa, ordenado por lead_potential"
            }
        }
    }
