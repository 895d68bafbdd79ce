"""
Relationship Router

Finds the strongest known path from the account's contacts to each target
decision-maker and turns it into an intro Opportunity.

Strategies, in priority order:
    1. Direct        The account knows the target (same person or connected).   95
    2. Second level  A contact who knows the target: same current company (85),
                     shared previous employer (75), explicit connection (70),
                     previously worked at the target's company (60).
    3. Inferred      Weaker heuristics; see INFERRED_HEURISTICS.              35-65

A target whose best route stays below the surfacing threshold produces no
Opportunity. Output is sorted by intro_strength_score, stable on ties.
"""
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence
from introengine.config import get_settings
from introengine.models.company import Company
from introengine.models.contact import Contact, TargetContact
from introengine.models.opportunity import (
    AnalysisResult,
    BestRoute,
    BridgeContact,
    Opportunity,
    OpportunityScore,
    RouteType,
    TargetSummary,
)
from introengine.services.commercial_scorer import CommercialScorer, get_commercial_scorer
from introengine.utils.metrics import metrics
from introengine.utils.observability import logger, log_engine_execution
from introengine.utils.text_normalizer import (
    mentions,
    mentions_token,
    name_similarity,
    normalize_domain,
    normalize_email,
    normalize_name,
    same_company,
    shared_companies,
)


@dataclass(frozen=True)
class RouteCandidate:
    """A possible path to one target, before it becomes a BestRoute."""
    route_type: RouteType
    bridge: Optional[Contact]
    confidence: int
    reason: str
    # Which rule produced the candidate; selects the intro template
    heuristic: str = ""
    # Lower is preferred when confidences tie
    priority: int = 0

    def beats(self, other: Optional["RouteCandidate"]) -> bool:
        if other is None:
            return True
        if self.confidence != other.confidence:
            return self.confidence > other.confidence
        return self.priority < other.priority


class RelationshipRouter:
    """
    Routes targets through the account's contact graph.

    Usage:
        router = RelationshipRouter()
        result = router.find_routes(contacts, targets, companies)
        for opp in result.opportunities:
            print(opp.target.full_name, opp.best_route.type, opp.intro_strength_score)
    """

    DIRECT_CONFIDENCE = 95

    SAME_COMPANY_CONFIDENCE = 85
    SHARED_PREVIOUS_EMPLOYER_CONFIDENCE = 75
    EXPLICIT_CONNECTION_CONFIDENCE = 70
    GENERIC_SECOND_LEVEL_CONFIDENCE = 60

    # Skip weaker strategies once the current best clears these
    SECOND_LEVEL_CUTOFF = 80
    INFERRED_CUTOFF = 50

    ROLE_SIMILARITY_THRESHOLD = 0.5

    # Inferred heuristics: name -> (confidence, tie-break priority).
    # On equal confidence the heuristic listed first wins, then input order.
    INFERRED_HEURISTICS: Dict[str, tuple] = {
        "shared_current_company": (65, 0),
        "shared_previous_employer": (55, 1),
        "similar_role": (45, 2),
        "shared_domain": (50, 3),
        "shared_industry": (40, 4),
        "interaction_mention": (35, 5),
    }

    def __init__(self, scorer: CommercialScorer | None = None, min_confidence: int | None = None):
        """
        Args:
            scorer: Scorer used for intro_strength_score (shared one if None)
            min_confidence: Surfacing threshold (settings.min_route_confidence if None)
        """
        self.scorer = scorer or get_commercial_scorer()
        self.min_confidence = (
            min_confidence if min_confidence is not None else get_settings().min_route_confidence
        )

    def find_routes(
        self,
        contacts: Sequence[Contact],
        targets: Sequence[TargetContact],
        companies: Sequence[Company],
    ) -> AnalysisResult:
        """
        Build at most one Opportunity per (company, target) pair.

        Args:
            contacts: The account's known contacts (potential bridges)
            targets: Decision-makers to reach
            companies: Companies referenced by contacts and targets

        Returns:
            AnalysisResult with opportunities sorted by intro_strength_score
        """
        start_time = time.perf_counter()
        companies_by_id = {c.id: c for c in companies}

        opportunities: List[Opportunity] = []
        seen = set()

        for target in targets:
            key = (target.company_id, target.id)
            if key in seen:
                logger.debug(f"Skipping duplicate target {target.id} at company {target.company_id}")
                continue
            seen.add(key)

            candidate = self.best_route_for(contacts, target, companies_by_id)
            if candidate is None or candidate.confidence < self.min_confidence:
                logger.debug(f"No viable route to target {target.id}")
                continue

            opportunities.append(self._build_opportunity(
                candidate, target, contacts, companies_by_id.get(target.company_id)
            ))
            metrics.routes_found.inc(route_type=candidate.route_type.value)

        # sorted() is stable: ties keep input order
        opportunities = sorted(opportunities, key=lambda o: o.intro_strength_score, reverse=True)

        log_engine_execution(
            engine="RelationshipRouter",
            action="find_routes",
            duration_ms=(time.perf_counter() - start_time) * 1000,
            contacts=len(contacts),
            targets=len(targets),
            opportunities=len(opportunities),
        )

        return AnalysisResult(opportunities=opportunities)

    def best_route_for(
        self,
        contacts: Sequence[Contact],
        target: TargetContact,
        companies_by_id: Dict[str, Company],
    ) -> Optional[RouteCandidate]:
        """Run the three strategies in priority order and keep the best."""
        best = self.find_direct_route(contacts, target)

        if best is None or best.confidence < self.SECOND_LEVEL_CUTOFF:
            second_level = self.find_second_level_route(contacts, target)
            if second_level is not None and (best is None or second_level.confidence > best.confidence):
                best = second_level

        if best is None or best.confidence < self.INFERRED_CUTOFF:
            inferred = self.find_inferred_route(contacts, target, companies_by_id)
            if inferred is not None and (best is None or inferred.confidence > best.confidence):
                best = inferred

        return best

    # ============================================
    # STRATEGY 1: DIRECT
    # ============================================

    def find_direct_route(
        self,
        contacts: Sequence[Contact],
        target: TargetContact,
    ) -> Optional[RouteCandidate]:
        contact = next((c for c in contacts if self.is_direct_connection(c, target)), None)
        if contact is None:
            return None

        return RouteCandidate(
            route_type=RouteType.DIRECT,
            bridge=contact,
            confidence=self.DIRECT_CONFIDENCE,
            reason="Conexión directa con el objetivo",
            heuristic="direct",
        )

    @staticmethod
    def is_direct_connection(contact: Contact, target: TargetContact) -> bool:
        """Same person (id or email), or listed in either side's connections."""
        if contact.id == target.id:
            return True

        contact_email = normalize_email(contact.email)
        if contact_email and contact_email == normalize_email(target.email):
            return True

        return target.id in contact.connections or contact.id in target.connections

    # ============================================
    # STRATEGY 2: SECOND LEVEL
    # ============================================

    def find_second_level_route(
        self,
        contacts: Sequence[Contact],
        target: TargetContact,
    ) -> Optional[RouteCandidate]:
        """Best bridge that plausibly knows the target; first one wins ties."""
        best: Optional[RouteCandidate] = None

        for bridge in contacts:
            candidate = self._second_level_candidate(bridge, target)
            if candidate is not None and candidate.beats(best):
                best = candidate

        return best

    def _second_level_candidate(
        self,
        bridge: Contact,
        target: TargetContact,
    ) -> Optional[RouteCandidate]:
        if bridge.company_id and same_company(bridge.company_id, target.company_id):
            confidence = self.SAME_COMPANY_CONFIDENCE
            reason = "El puente trabaja en la misma empresa que el objetivo"
        elif shared_companies(bridge.previous_companies, target.previous_companies):
            confidence = self.SHARED_PREVIOUS_EMPLOYER_CONFIDENCE
            reason = "El puente y el objetivo trabajaron en la misma empresa anteriormente"
        elif target.id in bridge.connections:
            confidence = self.EXPLICIT_CONNECTION_CONFIDENCE
            reason = "El puente tiene conexión directa con el objetivo"
        elif any(same_company(prev, target.company_id) for prev in bridge.previous_companies):
            confidence = self.GENERIC_SECOND_LEVEL_CONFIDENCE
            reason = "Conexión de segundo nivel detectada"
        else:
            return None

        return RouteCandidate(
            route_type=RouteType.SECOND_LEVEL,
            bridge=bridge,
            confidence=confidence,
            reason=reason,
            heuristic="second_level",
        )

    # ============================================
    # STRATEGY 3: INFERRED
    # ============================================

    def find_inferred_route(
        self,
        contacts: Sequence[Contact],
        target: TargetContact,
        companies_by_id: Dict[str, Company],
    ) -> Optional[RouteCandidate]:
        """
        Single best match across every heuristic and every contact.

        Ties are broken by heuristic order (INFERRED_HEURISTICS) and then by
        contact input order, never by evaluation order.
        """
        best: Optional[RouteCandidate] = None
        target_company = companies_by_id.get(target.company_id)

        for contact in contacts:
            for candidate in self._inferred_candidates(contact, target, target_company, companies_by_id):
                if candidate.beats(best):
                    best = candidate

        if best is None:
            best = self._interaction_mention_candidate(contacts, target, target_company)

        if best is None or best.confidence < self.min_confidence:
            return None
        return best

    def _inferred(self, heuristic: str, bridge: Optional[Contact], reason: str) -> RouteCandidate:
        confidence, priority = self.INFERRED_HEURISTICS[heuristic]
        return RouteCandidate(
            route_type=RouteType.INFERRED,
            bridge=bridge,
            confidence=confidence,
            reason=reason,
            heuristic=heuristic,
            priority=priority,
        )

    def _inferred_candidates(
        self,
        contact: Contact,
        target: TargetContact,
        target_company: Optional[Company],
        companies_by_id: Dict[str, Company],
    ) -> List[RouteCandidate]:
        candidates = []

        if contact.company_id and same_company(contact.company_id, target.company_id):
            candidates.append(self._inferred("shared_current_company", contact, "Comparten empresa actual"))

        common = shared_companies(contact.previous_companies, target.previous_companies)
        if common:
            candidates.append(self._inferred(
                "shared_previous_employer", contact, f"Comparten {len(common)} empresa(s) previa(s)"
            ))

        if name_similarity(contact.role_title, target.role_title) > self.ROLE_SIMILARITY_THRESHOLD:
            candidates.append(self._inferred(
                "similar_role", contact, "Roles similares en empresas relacionadas"
            ))

        contact_company = companies_by_id.get(contact.company_id) if contact.company_id else None
        if target_company is not None and contact_company is not None:
            target_domain = normalize_domain(target_company.domain or target_company.website)
            contact_domain = normalize_domain(contact_company.domain or contact_company.website)
            if target_domain and target_domain == contact_domain:
                candidates.append(self._inferred("shared_domain", contact, "Empresas con mismo dominio"))

            target_industry = normalize_name(target_company.industry)
            if target_industry and target_industry == normalize_name(contact_company.industry):
                candidates.append(self._inferred(
                    "shared_industry", contact, "Empresas en la misma industria"
                ))

        return candidates

    def _interaction_mention_candidate(
        self,
        contacts: Sequence[Contact],
        target: TargetContact,
        target_company: Optional[Company],
    ) -> Optional[RouteCandidate]:
        """Someone's interaction log mentions the target or its company."""
        names = [target.full_name]
        if target_company is not None:
            names.append(target_company.name)

        for contact in contacts:
            for entry in contact.interactions:
                if mentions_token(entry, target.company_id) or any(mentions(entry, name) for name in names):
                    return self._inferred(
                        "interaction_mention", None, "Contexto compartido detectado en interacciones"
                    )
        return None

    # ============================================
    # OPPORTUNITY ASSEMBLY
    # ============================================

    def _build_opportunity(
        self,
        candidate: RouteCandidate,
        target: TargetContact,
        contacts: Sequence[Contact],
        target_company: Optional[Company],
    ) -> Opportunity:
        bridge = candidate.bridge
        route = BestRoute(
            type=candidate.route_type,
            bridge_contact=BridgeContact(id=bridge.id, full_name=bridge.full_name) if bridge else None,
            confidence=candidate.confidence,
            why=candidate.reason,
        )

        intro_strength = self.scorer.intro_strength_score(
            route_type=route.type,
            bridge_contact_id=bridge.id if bridge else None,
            confidence=route.confidence,
            contacts=contacts,
        )

        logger.debug(
            f"Route to {target.id}: {route.type} via {bridge.id if bridge else 'no bridge'} "
            f"(confidence={route.confidence}, intro_strength={intro_strength})"
        )

        return Opportunity(
            company_id=target.company_id,
            target=TargetSummary(
                id=target.id,
                full_name=target.full_name,
                role_title=target.role_title,
                seniority=target.seniority,
            ),
            best_route=route,
            suggested_intro_message=render_intro_message(
                candidate.heuristic,
                target_name=target.full_name,
                bridge_name=bridge.full_name if bridge else None,
                company_name=target_company.name if target_company else None,
            ),
            score=OpportunityScore(intro_strength_score=intro_strength),
        )


# ============================================
# INTRO MESSAGE TEMPLATES
# ============================================

DEFAULT_INTRO_TEMPLATE = (
    "{greeting}, me gustaría conectarme contigo para explorar oportunidades de colaboración."
)

# heuristic -> template; anything missing falls back to DEFAULT_INTRO_TEMPLATE
INTRO_TEMPLATES: Dict[str, str] = {
    "direct": (
        "{greeting}, me gustaría conectarme contigo para hablar sobre "
        "oportunidades de colaboración."
    ),
    "second_level": (
        "{greeting}, {bridge} me sugirió que me ponga en contacto contigo. "
        "Me encantaría conversar sobre cómo podríamos trabajar juntos."
    ),
    "shared_current_company": (
        "{greeting}, vi que trabajas en {company} y me gustaría explorar posibles sinergias."
    ),
    "shared_previous_employer": (
        "{greeting}, noté que compartimos algunas conexiones profesionales "
        "y me gustaría conocer más sobre tu trabajo."
    ),
}


def render_intro_message(
    heuristic: str,
    target_name: Optional[str],
    bridge_name: Optional[str] = None,
    company_name: Optional[str] = None,
) -> str:
    """Template-based intro text; no free-form generation."""
    target_name = (target_name or "").strip()
    template = INTRO_TEMPLATES.get(heuristic, DEFAULT_INTRO_TEMPLATE)
    if "{bridge}" in template and not bridge_name:
        template = DEFAULT_INTRO_TEMPLATE

    return template.format(
        greeting=f"Hola {target_name}" if target_name else "Hola",
        bridge=bridge_name or "",
        company=company_name or "tu empresa",
    )


# Singleton instance
_router: Optional[RelationshipRouter] = None


def get_relationship_router() -> RelationshipRouter:
    """Get or create the relationship router singleton."""
    global _router
    if _router is None:
        _router = RelationshipRouter()
    return _router


def analyze_relationships(
    contacts: Sequence[Contact],
    targets: Sequence[TargetContact],
    companies: Sequence[Company],
) -> AnalysisResult:
    """Convenience function: route targets with the shared router."""
    return get_relationship_router().find_routes(contacts, targets, companies)
