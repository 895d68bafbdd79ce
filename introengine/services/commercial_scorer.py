"""
Commercial Scorer

Four independent 0-100 scores for a lead, plus a blended composite:

    industry_fit     How well the company matches the product (size, industry)
    buying_signal    How strongly the company shows intent to buy
    intro_strength   How good our path to the decision-maker is
    lead_potential   0.30 * industry_fit + 0.40 * buying_signal + 0.30 * intro_strength

Missing optional inputs resolve to neutral defaults; nothing here raises for
a validated Company / OpportunityRecord.
"""
from typing import Dict, List, Optional, Sequence
from introengine.core.classifiers import (
    classify_role,
    industry_fit_adjustment,
    is_c_level,
    is_senior,
    normalize_size_bucket,
)
from introengine.models.company import BuyingSignal, Company, SignalStrength, SignalType, SizeBucket
from introengine.models.contact import Contact
from introengine.models.opportunity import RouteType
from introengine.models.outreach import RoleType
from introengine.models.scoring import OpportunityRecord, ScoreSet, ScoringResult
from introengine.utils.numeric import clamp_score, round_half_up, to_decimal, weighted_sum
from introengine.utils.observability import logger


class CommercialScorer:
    """
    Computes ScoreSets for (company, contacts, opportunity) triples.

    Usage:
        scorer = CommercialScorer()
        result = scorer.score(company, contacts, OpportunityRecord(...))
        print(result.scores.lead_potential_score, result.explanation)
    """

    # ============================================
    # INDUSTRY FIT
    # ============================================
    INDUSTRY_FIT_BASE = 50

    SIZE_ADJUSTMENTS: Dict[SizeBucket, int] = {
        SizeBucket.STARTUP: 25,
        SizeBucket.SMALL: 25,
        SizeBucket.MEDIUM: 15,
        SizeBucket.LARGE: -10,
        SizeBucket.ENTERPRISE: -20,
    }

    # ============================================
    # BUYING SIGNALS
    # ============================================
    NO_SIGNAL_SCORE = 30
    DEFAULT_SIGNAL_WEIGHT = 10

    SIGNAL_WEIGHTS: Dict[SignalType, int] = {
        SignalType.HR_SHORTAGE: 30,
        SignalType.HIRING: 25,
        SignalType.COMPLIANCE_ISSUES: 25,
        SignalType.OPERATIONAL_CHAOS: 20,
        SignalType.MANUAL_PROCESSES: 20,
        SignalType.GROWTH: 15,
        SignalType.EXPANSION: 15,
    }

    STRENGTH_MULTIPLIERS: Dict[SignalStrength, str] = {
        SignalStrength.HIGH: "1.0",
        SignalStrength.MEDIUM: "0.7",
        SignalStrength.LOW: "0.4",
    }

    # (minimum signal count, bonus)
    MULTI_SIGNAL_BONUSES = ((2, 5), (3, 5))

    # ============================================
    # INTRO STRENGTH
    # ============================================
    NO_BRIDGE_SCORE = 20
    UNKNOWN_ROUTE_BASE = 50

    ROUTE_BASE_SCORES: Dict[RouteType, int] = {
        RouteType.DIRECT: 90,
        RouteType.SECOND_LEVEL: 70,
        RouteType.INFERRED: 40,
    }

    HR_BRIDGE_BONUS = 10
    EXECUTIVE_BRIDGE_BONUS = 8
    SENIOR_BRIDGE_BONUS = 5

    # (minimum known connections, bonus), first match wins
    CONNECTIVITY_BONUSES = ((10, 5), (5, 3))

    # ============================================
    # LEAD POTENTIAL
    # ============================================
    LEAD_POTENTIAL_WEIGHTS = {
        "industry_fit": "0.30",
        "buying_signal": "0.40",
        "intro_strength": "0.30",
    }

    HIGH_TIER = 70
    MODERATE_TIER = 50

    def score(
        self,
        company: Company,
        contacts: Optional[Sequence[Contact]],
        opportunity: OpportunityRecord,
    ) -> ScoringResult:
        """
        Score one opportunity.

        Args:
            company: The company the opportunity belongs to
            contacts: Known contacts (used to look up the bridge); may be empty
            opportunity: Opportunity-like record (route type, bridge, confidence, signals)

        Returns:
            ScoringResult with the four scores and a short explanation
        """
        contacts = contacts or []

        industry_fit = self.industry_fit_score(company)
        buying_signal = self.buying_signal_score(opportunity.buying_signals)
        intro_strength = self.intro_strength_score(
            route_type=opportunity.type,
            bridge_contact_id=opportunity.bridge_contact_id,
            confidence=opportunity.confidence,
            contacts=contacts,
        )
        lead_potential = self.lead_potential_score(industry_fit, buying_signal, intro_strength)

        scores = ScoreSet(
            industry_fit_score=industry_fit,
            buying_signal_score=buying_signal,
            intro_strength_score=intro_strength,
            lead_potential_score=lead_potential,
        )

        logger.debug(
            f"Scored opportunity for company {company.id}: "
            f"fit={industry_fit} signals={buying_signal} intro={intro_strength} lead={lead_potential}"
        )

        has_bridge = bool(opportunity.bridge_contact_id) or opportunity.type == RouteType.DIRECT
        return ScoringResult(scores=scores, explanation=self.explain(scores, has_bridge))

    def industry_fit_score(self, company: Company) -> int:
        size = normalize_size_bucket(company.size_bucket)
        score = (
            self.INDUSTRY_FIT_BASE
            + self.SIZE_ADJUSTMENTS[size]
            + industry_fit_adjustment(company.industry)
        )
        return clamp_score(score)

    def buying_signal_score(self, signals: Optional[Sequence[BuyingSignal]]) -> int:
        """
        Normalize weighted signals into [30, 100] plus a multi-signal bonus.

        Each signal contributes weight*strength against a maximum of weight,
        so a single high-strength signal alone reaches 100 before bonuses.
        """
        signals = signals or []
        if not signals:
            return self.NO_SIGNAL_SCORE

        total = to_decimal(0)
        maximum = to_decimal(0)
        for signal in signals:
            weight = self.SIGNAL_WEIGHTS.get(signal.type, self.DEFAULT_SIGNAL_WEIGHT)
            multiplier = self.STRENGTH_MULTIPLIERS[signal.strength]
            total += weighted_sum([(weight, multiplier)])
            maximum += weight

        score = self.NO_SIGNAL_SCORE + 70 * total / maximum
        for min_count, bonus in self.MULTI_SIGNAL_BONUSES:
            if len(signals) >= min_count:
                score += bonus

        return clamp_score(score)

    def intro_strength_score(
        self,
        route_type: Optional[RouteType],
        bridge_contact_id: Optional[str],
        confidence: Optional[float],
        contacts: Sequence[Contact],
    ) -> int:
        if not bridge_contact_id and route_type != RouteType.DIRECT:
            return self.NO_BRIDGE_SCORE

        score = self.ROUTE_BASE_SCORES.get(route_type, self.UNKNOWN_ROUTE_BASE)

        if confidence is not None:
            score = round_half_up(weighted_sum([(score, "0.6"), (confidence, "0.4")]))

        if bridge_contact_id:
            bridge = next((c for c in contacts if c.id == bridge_contact_id), None)
            if bridge is not None:
                score += self.bridge_quality_bonus(bridge)

        return clamp_score(score)

    def bridge_quality_bonus(self, bridge: Contact) -> int:
        """Role relevance of the bridge plus how connected they are."""
        role_type = classify_role(bridge.role_title)

        if role_type == RoleType.HR:
            bonus = self.HR_BRIDGE_BONUS
        elif role_type == RoleType.CEO or is_c_level(bridge.seniority):
            bonus = self.EXECUTIVE_BRIDGE_BONUS
        elif is_senior(bridge.role_title, bridge.seniority):
            bonus = self.SENIOR_BRIDGE_BONUS
        else:
            bonus = 0

        connection_count = len(bridge.connections)
        for min_connections, connectivity_bonus in self.CONNECTIVITY_BONUSES:
            if connection_count >= min_connections:
                bonus += connectivity_bonus
                break

        return bonus

    def lead_potential_score(self, industry_fit: int, buying_signal: int, intro_strength: int) -> int:
        weights = self.LEAD_POTENTIAL_WEIGHTS
        return clamp_score(weighted_sum([
            (industry_fit, weights["industry_fit"]),
            (buying_signal, weights["buying_signal"]),
            (intro_strength, weights["intro_strength"]),
        ]))

    # ============================================
    # EXPLANATION
    # ============================================

    def explain(self, scores: ScoreSet, has_bridge: bool) -> str:
        """Three short sentences: overall tier, driving factors, recommendation."""
        lead = scores.lead_potential_score

        if lead >= self.HIGH_TIER:
            headline = "Lead de alto potencial: "
            recommendation = " Priorizar este lead para seguimiento inmediato."
        elif lead >= self.MODERATE_TIER:
            headline = "Lead con potencial moderado: "
            recommendation = " Considerar seguimiento si hay capacidad disponible."
        else:
            headline = "Lead con potencial limitado: "
            recommendation = " Evaluar si vale la pena invertir tiempo en este lead."

        factors = self._explanation_factors(scores, has_bridge)
        if factors:
            body = ", ".join(factors) + "."
        else:
            body = "evaluación balanceada en todos los factores."

        return headline + body + recommendation

    def _explanation_factors(self, scores: ScoreSet, has_bridge: bool) -> List[str]:
        factors = []

        if scores.industry_fit_score >= 70:
            factors.append("excelente fit de industria")
        elif scores.industry_fit_score < 50:
            factors.append("fit de industria limitado")

        if scores.buying_signal_score >= 70:
            factors.append("fuertes señales de compra")
        elif scores.buying_signal_score < 40:
            factors.append("señales de compra débiles")

        if scores.intro_strength_score >= 70:
            factors.append("buen acceso a través de puente")
        elif scores.intro_strength_score < 40 and not has_bridge:
            factors.append("sin acceso directo")

        return factors


# Singleton instance
_scorer: Optional[CommercialScorer] = None


def get_commercial_scorer() -> CommercialScorer:
    """Get or create the commercial scorer singleton."""
    global _scorer
    if _scorer is None:
        _scorer = CommercialScorer()
    return _scorer


def calculate_commercial_scores(
    company: Company,
    contacts: Optional[Sequence[Contact]],
    opportunity: OpportunityRecord,
) -> ScoringResult:
    """Convenience function: score one opportunity with the shared scorer."""
    return get_commercial_scorer().score(company, contacts, opportunity)
