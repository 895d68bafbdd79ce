"""
Intro Pipeline

Runs the engines in order for each company of an account:

    RelationshipRouter -> CommercialScorer -> OutboundComposer

Companies with at least one viable route get scored intro opportunities.
Companies nobody can introduce us to get a cold outbound draft instead.
"""
from typing import Dict, List, Optional, Sequence, Tuple
from introengine.models.account import AccountAnalysis, CompanyAnalysis, ScoredOpportunity
from introengine.models.company import BuyingSignal, Company
from introengine.models.contact import Contact, TargetContact
from introengine.models.scoring import OpportunityRecord
from introengine.services.commercial_scorer import CommercialScorer, get_commercial_scorer
from introengine.services.outbound_composer import (
    OutboundComposer,
    default_target_role_for_company,
    get_outbound_composer,
)
from introengine.services.relationship_router import RelationshipRouter, get_relationship_router
from introengine.utils.metrics import metrics
from introengine.utils.observability import log_business_event, log_engine_execution, logger


def separate_contacts(
    contacts: Sequence[Contact],
    company_id: str,
) -> Tuple[List[Contact], List[TargetContact]]:
    """
    Split the account's contacts into bridges and targets for one company.

    People working at the company are targets when they have a role title
    and a seniority (scoring needs both); those missing either stay bridges.
    Everybody else is a potential bridge.
    """
    bridges: List[Contact] = []
    targets: List[TargetContact] = []

    for contact in contacts:
        if contact.company_id == company_id and contact.role_title and contact.seniority:
            targets.append(TargetContact(
                id=contact.id,
                full_name=contact.full_name,
                email=contact.email,
                company_id=company_id,
                role_title=contact.role_title,
                seniority=contact.seniority,
                previous_companies=contact.previous_companies,
                previous_roles=contact.previous_roles,
                linkedin_url=contact.linkedin_url,
                connections=contact.connections,
            ))
        else:
            bridges.append(contact)

    return bridges, targets


class IntroPipeline:
    """
    Orchestrates routing, scoring and outbound fallback per company.

    Usage:
        pipeline = IntroPipeline()
        analysis = pipeline.analyze_company(company, contacts, targets, signals=signals)
        if analysis.outbound:
            print(analysis.outbound.outbound.short)

        account = pipeline.analyze_account(companies, contacts)
        for item in account.companies:
            print(item.company.name, item.best_lead_potential)
    """

    def __init__(
        self,
        router: Optional[RelationshipRouter] = None,
        scorer: Optional[CommercialScorer] = None,
        outbound_composer: Optional[OutboundComposer] = None,
    ):
        self.router = router or get_relationship_router()
        self.scorer = scorer or get_commercial_scorer()
        self.outbound_composer = outbound_composer or get_outbound_composer()

    def analyze_company(
        self,
        company: Company,
        contacts: Sequence[Contact],
        targets: Sequence[TargetContact],
        companies: Optional[Sequence[Company]] = None,
        signals: Optional[Sequence[BuyingSignal]] = None,
    ) -> CompanyAnalysis:
        """
        Analyze one company.

        Args:
            company: The company to work
            contacts: Potential bridges
            targets: Decision-makers; only those at `company` are routed
            companies: Company directory for domain/industry heuristics
            signals: Buying signals observed for `company`

        Returns:
            CompanyAnalysis with scored opportunities, or an outbound draft
        """
        signals = list(signals or [])
        directory = [c for c in (companies or []) if c.id != company.id] + [company]
        company_targets = [t for t in targets if t.company_id == company.id]

        with metrics.time_engine("intro_pipeline") as timer:
            routed = self.router.find_routes(contacts, company_targets, directory)

            scored = [
                ScoredOpportunity(
                    opportunity=opportunity,
                    scoring=self.scorer.score(
                        company, contacts, OpportunityRecord.from_opportunity(opportunity, signals)
                    ),
                )
                for opportunity in routed.opportunities
            ]

            if scored:
                analysis = CompanyAnalysis(company=company, opportunities=scored)
            else:
                role = default_target_role_for_company(company)
                analysis = CompanyAnalysis(
                    company=company,
                    outbound=self.outbound_composer.compose(company, role, signals),
                    outbound_role=role,
                )

        log_engine_execution(
            engine="IntroPipeline",
            action="analyze_company",
            duration_ms=timer.elapsed_ms,
            company_id=company.id,
            targets=len(company_targets),
            opportunities=len(scored),
            best_lead_potential=analysis.best_lead_potential,
        )

        if scored:
            log_business_event(
                "intro_routes_found",
                company_id=company.id,
                opportunities=len(scored),
                best_route=scored[0].opportunity.best_route.type.value,
            )
        else:
            log_business_event(
                "outbound_fallback",
                company_id=company.id,
                target_role=analysis.outbound_role,
                signals=len(signals),
            )

        return analysis

    def analyze_account(
        self,
        companies: Sequence[Company],
        contacts: Sequence[Contact],
        targets: Optional[Sequence[TargetContact]] = None,
        signals_by_company: Optional[Dict[str, List[BuyingSignal]]] = None,
    ) -> AccountAnalysis:
        """
        Analyze every company of an account, most promising first.

        When `targets` is None they are taken from `contacts` per company
        (see separate_contacts). Ties in lead potential keep input order.
        """
        signals_by_company = signals_by_company or {}
        analyses: List[CompanyAnalysis] = []

        for company in companies:
            if targets is None:
                bridges, company_targets = separate_contacts(contacts, company.id)
            else:
                bridges, company_targets = list(contacts), list(targets)

            if not company_targets:
                logger.debug(f"No target candidates at company {company.id}")

            analyses.append(self.analyze_company(
                company,
                bridges,
                company_targets,
                companies=companies,
                signals=signals_by_company.get(company.id),
            ))

        analyses.sort(key=lambda item: item.best_lead_potential, reverse=True)
        return AccountAnalysis(companies=analyses)


# Singleton instance
_pipeline: Optional[IntroPipeline] = None


def get_intro_pipeline() -> IntroPipeline:
    """Get or create the intro pipeline singleton."""
    global _pipeline
    if _pipeline is None:
        _pipeline = IntroPipeline()
    return _pipeline
