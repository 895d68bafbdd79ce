"""
Tests for follow-up composition, audience detection and wait computation.
"""
import datetime as dt
import pytest
from introengine.models.outreach import FollowupAudience, FollowupOpportunity, ToneBand
from introengine.services.followup_composer import (
    FOLLOWUP_TEMPLATES,
    FollowupComposer,
    days_without_activity,
    determine_followup_audience,
    generate_followups,
)


@pytest.fixture
def composer():
    return FollowupComposer()


@pytest.fixture
def opportunity():
    return FollowupOpportunity(
        id="o1",
        company_name="Tiendas Sol",
        target_contact_name="Laura",
        bridge_contact_name="Marta",
        type="intro",
        status="intro_requested",
    )


class TestTemplates:

    def test_every_audience_and_tone_present(self):
        for audience in FollowupAudience:
            for tone in ToneBand:
                assert (audience, tone) in FOLLOWUP_TEMPLATES


class TestCompose:

    def test_day_zero_is_gentle(self, composer, opportunity):
        result = composer.compose(opportunity, days_waiting=0)

        assert result.tone == ToneBand.GENTLE
        assert result.days_waiting == 0
        assert result.followups.bridge_contact.startswith("Hola Marta,")
        assert "presentarme a Laura en Tiendas Sol" in result.followups.bridge_contact

    def test_day_45_is_soft_closure_with_different_text(self, composer, opportunity):
        gentle = composer.compose(opportunity, days_waiting=0)
        closing = composer.compose(opportunity, days_waiting=45)

        assert closing.tone == ToneBand.SOFT_CLOSURE
        assert closing.followups.bridge_contact != gentle.followups.bridge_contact
        assert closing.followups.prospect != gentle.followups.prospect
        assert closing.followups.outbound != gentle.followups.outbound

    def test_prospect_and_outbound_greet_the_target(self, composer, opportunity):
        result = composer.compose(opportunity, days_waiting=10)

        assert result.tone == ToneBand.RESPECTFUL_REMINDER
        assert result.followups.prospect.startswith("Hola Laura,")
        assert result.followups.outbound.startswith("Hola Laura,")
        assert "Witar" in result.followups.prospect

    def test_missing_names_fall_back(self, composer):
        result = composer.compose(FollowupOpportunity(), days_waiting=2)

        assert result.followups.bridge_contact.startswith("Hola,\n\n")
        assert "presentarme a ellos en la empresa" in result.followups.bridge_contact
        assert "tu empresa" in result.followups.outbound
        assert "{" not in result.followups.prospect

    @pytest.mark.parametrize("days, expected", [(-3, 0), (None, 0), (2.5, 3), (7.2, 7)])
    def test_days_are_normalized(self, composer, opportunity, days, expected):
        assert composer.compose(opportunity, days_waiting=days).days_waiting == expected

    def test_huge_wait_is_a_soft_closure(self, composer):
        result = composer.compose(FollowupOpportunity(company_name="Acme"), days_waiting=1e30)

        assert result.tone == ToneBand.SOFT_CLOSURE
        assert result.days_waiting == 10**30
        assert "Acme" in result.followups.outbound

    def test_convenience_function(self, opportunity):
        assert generate_followups(opportunity, 20).tone == ToneBand.RE_ENGAGEMENT


class TestAudience:

    @pytest.mark.parametrize("kind, status, expected", [
        ("intro", "intro_requested", FollowupAudience.BRIDGE_CONTACT),
        ("intro", "in_progress", FollowupAudience.PROSPECT),
        ("intro", "demo_scheduled", FollowupAudience.PROSPECT),
        ("outbound", "outbound_sent", FollowupAudience.OUTBOUND),
        ("outbound", "in_progress", FollowupAudience.OUTBOUND),
        ("intro", "suggested", None),
        ("outbound", "suggested", None),
        ("intro", "won", None),
        ("outbound", "lost", None),
        (None, None, None),
    ])
    def test_determine(self, kind, status, expected):
        assert determine_followup_audience(FollowupOpportunity(type=kind, status=status)) == expected


class TestDaysWithoutActivity:

    def test_uses_last_action(self, now):
        last = now - dt.timedelta(days=4, hours=20)
        created = now - dt.timedelta(days=30)

        assert days_without_activity(last, created, now=now) == 4

    def test_falls_back_to_creation(self, now):
        assert days_without_activity(None, now - dt.timedelta(days=9), now=now) == 9

    def test_nothing_known(self, now):
        assert days_without_activity(None, None, now=now) == 0

    def test_future_dates_clamp_to_zero(self, now):
        assert days_without_activity(now + dt.timedelta(days=2), None, now=now) == 0

    def test_naive_datetimes_are_utc(self, now):
        naive = dt.datetime(2026, 3, 13, 12, 0)
        assert days_without_activity(naive, None, now=now) == 3
