"""
Tests for the outbound composer: template tables, copy selection and lead score.
"""
import pytest
from introengine.config import get_settings
from introengine.models.company import BuyingSignal, Company, SignalStrength, SignalType
from introengine.models.outreach import Role, RoleType
from introengine.services.outbound_composer import (
    CEO_TITLE,
    CTA_BY_ROLE,
    DEFAULT_CTA,
    GENERIC_REASON,
    HR_TITLE,
    LONG_TEMPLATES,
    OPERATIONS_TITLE,
    SHORT_TEMPLATES,
    SIGNAL_KEYS,
    SMALL_COMPANY_REASON,
    OutboundComposer,
    as_role,
    default_target_role_for_company,
    generate_outbound,
)

FIELDS = {"company": "Acme", "pitch": "Pitch.", "product": "Witar"}


@pytest.fixture
def composer():
    return OutboundComposer()


class TestTemplateTables:

    @pytest.mark.parametrize("table", [SHORT_TEMPLATES, LONG_TEMPLATES])
    def test_every_role_signal_combination_present(self, table):
        for role in RoleType:
            for signal in SIGNAL_KEYS:
                assert (role, signal) in table

    @pytest.mark.parametrize("table", [SHORT_TEMPLATES, LONG_TEMPLATES])
    def test_templates_render_with_known_placeholders(self, table):
        for template in table.values():
            rendered = template.format(**FIELDS)
            assert "{" not in rendered
            assert "Acme" in rendered or "Pitch." in rendered


class TestCompose:

    def test_hr_with_hr_shortage(self, composer, retail_company, strong_signals):
        result = composer.compose(retail_company, "Responsable de RRHH", strong_signals)
        outbound = result.outbound

        assert outbound.short.startswith("Hola, veo que Tiendas Sol está en crecimiento.")
        assert outbound.long.startswith("Hola,\n\nVeo que Tiendas Sol")
        assert outbound.long == outbound.long.strip()
        assert outbound.cta == CTA_BY_ROLE[RoleType.HR]
        assert "carga administrativa" in outbound.reason_now

    def test_role_object_is_accepted(self, composer, retail_company):
        result = composer.compose(retail_company, Role(title="CEO", seniority="c-level"))

        assert result.outbound.cta == CTA_BY_ROLE[RoleType.CEO]
        assert "como CEO de Tiendas Sol" in result.outbound.short

    def test_english_executive_title_gets_ceo_copy(self, composer, retail_company):
        spelled_out = composer.compose(retail_company, Role(title="Chief Executive Officer", seniority="c-level"))
        short = composer.compose(retail_company, "CEO")

        assert spelled_out.outbound.cta == short.outbound.cta == CTA_BY_ROLE[RoleType.CEO]

    def test_c_level_seniority_without_functional_title(self, composer, retail_company):
        result = composer.compose(retail_company, Role(title="Chief Technology Officer", seniority="C-Level"))

        assert result.outbound.cta == CTA_BY_ROLE[RoleType.CEO]

    def test_seniority_does_not_override_title(self, composer, retail_company):
        result = composer.compose(retail_company, Role(title="Chief Operating Officer", seniority="c-level"))

        assert "como responsable de Operaciones en Tiendas Sol" in result.outbound.short

    def test_unknown_role_gets_generic_copy(self, composer, bank_company):
        result = composer.compose(bank_company, "Head of Sales")

        assert result.outbound.short.startswith("Hola, vi que Banco Central está en crecimiento.")
        assert result.outbound.cta == DEFAULT_CTA
        assert result.outbound.reason_now == GENERIC_REASON

    def test_small_company_without_signals(self, composer, retail_company):
        assert composer.compose(retail_company, "CEO").outbound.reason_now == SMALL_COMPANY_REASON

    def test_reason_now_mentions_product(self, composer, retail_company):
        signals = [BuyingSignal(type=SignalType.HIRING, strength=SignalStrength.HIGH)]

        reason = composer.compose(retail_company, "CEO", signals).outbound.reason_now

        assert "Witar" in reason
        assert "{product}" not in reason

    def test_renamed_product_replaces_it_in_pitch(self, composer, retail_company, monkeypatch):
        get_settings.cache_clear()
        monkeypatch.setenv("PRODUCT_NAME", "Acme HR")

        try:
            short = composer.compose(retail_company, "Head of Sales").outbound.short
        finally:
            get_settings.cache_clear()

        assert "Acme HR ayuda" in short
        assert "Witar" not in short

    def test_convenience_function(self, retail_company):
        assert generate_outbound(retail_company, "CEO").score.lead_potential_score > 0


class TestPrimarySignal:

    def test_strongest_relevant_signal(self, composer):
        signals = [
            BuyingSignal(type=SignalType.HIRING, strength="medium"),
            BuyingSignal(type=SignalType.MANUAL_PROCESSES, strength="high"),
        ]
        assert composer.primary_signal(signals).type == SignalType.MANUAL_PROCESSES

    def test_relevance_breaks_strength_ties(self, composer):
        signals = [
            BuyingSignal(type=SignalType.GROWTH, strength="high"),
            BuyingSignal(type=SignalType.HIRING, strength="low"),
            BuyingSignal(type=SignalType.HR_SHORTAGE, strength="low"),
        ]
        assert composer.primary_signal(signals).type == SignalType.HR_SHORTAGE

    def test_first_signal_when_none_relevant(self, composer):
        signals = [
            BuyingSignal(type=SignalType.EXPANSION, strength="low"),
            BuyingSignal(type=SignalType.GROWTH, strength="high"),
        ]
        assert composer.primary_signal(signals).type == SignalType.EXPANSION

    def test_no_signals(self, composer):
        assert composer.primary_signal([]) is None


class TestLeadPotential:

    def test_best_case_is_capped(self, composer, retail_company, strong_signals):
        # 50 + 20 size + 15 HR + 10 signals + 5 multi-signal + 5 hourly staff
        assert composer.lead_potential_score(retail_company, RoleType.HR, strong_signals) == 100

    def test_enterprise_finance(self, composer, bank_company):
        assert composer.lead_potential_score(bank_company, RoleType.FINANCE, []) == 45

    def test_irrelevant_signals_weigh_less(self, composer):
        company = Company(id="x", name="X", industry="Software", size_bucket="1-10")
        signals = [BuyingSignal(type=SignalType.GROWTH, strength="low")]

        assert composer.lead_potential_score(company, RoleType.OTHER, signals) == 71

    def test_relevant_signal_cap(self, composer):
        company = Company(id="x", name="X", industry="Software", size_bucket="51-200")
        signals = [BuyingSignal(type=SignalType.HR_SHORTAGE, strength="high")] * 4

        # 50 + 10 medium + 20 capped signals + 10 multi-signal
        assert composer.lead_potential_score(company, RoleType.OTHER, signals) == 90


class TestDefaultTargetRole:

    @pytest.mark.parametrize("industry, size, expected", [
        ("Software", "1-10", CEO_TITLE),
        ("Retail", "11-50", OPERATIONS_TITLE),
        ("Manufactura", "51-200", HR_TITLE),
        ("Software", "51-200", OPERATIONS_TITLE),
        ("Software", "enterprise", HR_TITLE),
        (None, None, CEO_TITLE),
    ])
    def test_by_size_and_industry(self, industry, size, expected):
        company = Company(id="x", name="X", industry=industry, size_bucket=size)
        assert default_target_role_for_company(company) == expected


class TestAsRole:

    def test_title_string(self):
        assert as_role("  CFO ") == Role(title="CFO")

    def test_empty_title(self):
        assert as_role("").title == "Responsable"
