"""
Tests for the commercial scorer.
"""
import random
import pytest
from introengine.models.company import BuyingSignal, Company, SignalStrength, SignalType
from introengine.models.contact import Contact
from introengine.models.opportunity import RouteType
from introengine.models.scoring import OpportunityRecord
from introengine.services.commercial_scorer import CommercialScorer, calculate_commercial_scores


@pytest.fixture
def scorer():
    return CommercialScorer()


class TestSmallRetailWithoutBridge:
    """Small retail company, no signals, no bridge."""

    def test_scores(self, scorer, retail_company):
        result = scorer.score(retail_company, [], OpportunityRecord(company_id="c1"))
        scores = result.scores

        assert scores.industry_fit_score == 95
        assert scores.buying_signal_score == 30
        assert scores.intro_strength_score == 20
        # 95*0.3 + 30*0.4 + 20*0.3 = 46.5, rounded half-up
        assert scores.lead_potential_score == 47

    def test_explanation(self, scorer, retail_company):
        result = calculate_commercial_scores(retail_company, None, OpportunityRecord(company_id="c1"))

        assert result.explanation.startswith("Lead con potencial limitado: ")
        assert "excelente fit de industria" in result.explanation
        assert "sin acceso directo" in result.explanation


class TestIndustryFit:

    def test_enterprise_bank(self, scorer, bank_company):
        assert scorer.industry_fit_score(bank_company) == 15

    def test_unknown_size_and_industry(self, scorer):
        assert scorer.industry_fit_score(Company(id="x", name="X")) == 75

    def test_medium_software(self, scorer):
        company = Company(id="x", name="X", industry="Software", size_bucket="51-200")
        assert scorer.industry_fit_score(company) == 75


class TestBuyingSignals:

    def test_no_signals(self, scorer):
        assert scorer.buying_signal_score([]) == 30
        assert scorer.buying_signal_score(None) == 30

    def test_single_high_signal_reaches_top(self, scorer):
        signal = BuyingSignal(type=SignalType.HR_SHORTAGE, strength=SignalStrength.HIGH)
        assert scorer.buying_signal_score([signal]) == 100

    def test_strength_is_monotonic(self, scorer):
        scores = [
            scorer.buying_signal_score([BuyingSignal(type=SignalType.HIRING, strength=strength)])
            for strength in (SignalStrength.LOW, SignalStrength.MEDIUM, SignalStrength.HIGH)
        ]
        assert scores == sorted(scores)
        assert len(set(scores)) == 3

    def test_low_signal(self, scorer):
        # 30 + 70 * 0.4
        assert scorer.buying_signal_score([BuyingSignal(type=SignalType.HIRING, strength="low")]) == 58

    def test_multiple_signals_add_bonus(self, scorer, strong_signals):
        # 30 + 70 * (30 + 17.5) / 55 = 90.45, +5 for two signals
        assert scorer.buying_signal_score(strong_signals) == 95


class TestIntroStrength:

    def test_no_bridge(self, scorer):
        assert scorer.intro_strength_score(None, None, None, []) == 20

    def test_direct_without_bridge_id(self, scorer):
        assert scorer.intro_strength_score(RouteType.DIRECT, None, None, []) == 90

    def test_confidence_blends_with_route_base(self, scorer):
        # 0.6*70 + 0.4*70
        assert scorer.intro_strength_score(RouteType.SECOND_LEVEL, "u9", 70, []) == 70

    def test_bridge_quality_bonus(self, scorer, hr_bridge):
        # HR bridge +10, ten connections +5
        assert scorer.intro_strength_score(RouteType.SECOND_LEVEL, "u2", 70, [hr_bridge]) == 85

    def test_senior_and_executive_bridges(self, scorer):
        senior = Contact(id="a", full_name="A", role_title="Director Comercial")
        executive = Contact(id="b", full_name="B", role_title="CFO", seniority="C-Level", connections=["1"] * 5)
        plain = Contact(id="c", full_name="C")

        assert scorer.bridge_quality_bonus(senior) == 5
        assert scorer.bridge_quality_bonus(executive) == 11
        assert scorer.bridge_quality_bonus(plain) == 0


class TestScoreBounds:

    def test_scores_stay_in_range(self, scorer):
        rng = random.Random(42)
        sizes = [None, "1-10", "51-200", "1000+", "enterprise", "startup", "???"]
        industries = [None, "Retail", "Banca", "Software", "Gobierno", "Hospitalidad"]

        for _ in range(200):
            company = Company(id="c", name="C", size_bucket=rng.choice(sizes), industry=rng.choice(industries))
            signals = [
                BuyingSignal(type=rng.choice(list(SignalType)), strength=rng.choice(list(SignalStrength)))
                for _ in range(rng.randint(0, 6))
            ]
            bridge = Contact(
                id="b", full_name="B",
                role_title=rng.choice([None, "CEO", "RRHH", "Director"]),
                seniority=rng.choice([None, "c-level", "senior"]),
                connections=[str(i) for i in range(rng.randint(0, 15))],
            )
            record = OpportunityRecord(
                company_id="c",
                type=rng.choice([None, *RouteType]),
                bridge_contact_id=rng.choice([None, "b"]),
                confidence=rng.choice([None, 0, 35, 70, 95, 100]),
                buying_signals=signals,
            )

            scores = scorer.score(company, [bridge], record).scores

            for value in scores.model_dump().values():
                assert 0 <= value <= 100
            assert min(scores.industry_fit_score, scores.buying_signal_score, scores.intro_strength_score) \
                <= scores.lead_potential_score \
                <= max(scores.industry_fit_score, scores.buying_signal_score, scores.intro_strength_score)

    def test_same_input_same_output(self, scorer, retail_company, strong_signals, hr_bridge):
        record = OpportunityRecord(
            company_id="c1", type="second_level", bridge_contact_id="u2", confidence=70,
            buying_signals=strong_signals,
        )

        first = scorer.score(retail_company, [hr_bridge], record)
        second = scorer.score(retail_company, [hr_bridge], record)

        assert first == second
