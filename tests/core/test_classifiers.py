"""
Tests for the table-driven classifiers (role, seniority, size, industry).
"""
import pytest
from introengine.core.classifiers import (
    classify_role,
    industry_fit_adjustment,
    is_c_level,
    is_senior,
    normalize_size_bucket,
)
from introengine.models.company import SizeBucket
from introengine.models.outreach import RoleType


class TestRoleClassification:

    @pytest.mark.parametrize("title, expected", [
        ("CEO", RoleType.CEO),
        ("Fundadora", RoleType.CEO),
        ("Responsable de RRHH", RoleType.HR),
        ("Chief Executive Officer", RoleType.CEO),
        ("Chief People Officer", RoleType.HR),
        ("Chief Operating Officer", RoleType.OPERATIONS),
        ("Chief Financial Officer", RoleType.FINANCE),
        ("Jefe de Operaciones", RoleType.OPERATIONS),
        ("COO", RoleType.OPERATIONS),
        ("CFO", RoleType.FINANCE),
        ("Contadora", RoleType.FINANCE),
        ("Head of Sales", RoleType.OTHER),
    ])
    def test_titles(self, title, expected):
        assert classify_role(title) == expected

    def test_ceo_keywords_take_precedence(self):
        """'Director General de Operaciones' runs the company."""
        assert classify_role("Director General de Operaciones") == RoleType.CEO

    def test_single_words_match_whole_tokens_only(self):
        """'hr' must not fire inside 'three' or 'chrome'."""
        assert classify_role("Chrome Developer") == RoleType.OTHER

    def test_accents_and_case_ignored(self):
        assert classify_role("DUEÑO") == RoleType.CEO

    def test_missing_title(self):
        assert classify_role(None) == RoleType.OTHER
        assert classify_role("") == RoleType.OTHER

    def test_c_level_seniority_fallback(self):
        assert classify_role("Chief Technology Officer", "c-level") == RoleType.CEO
        assert classify_role(None, "C-Suite") == RoleType.CEO
        assert classify_role("Chief Technology Officer", "senior") == RoleType.OTHER

    def test_title_keyword_beats_seniority(self):
        assert classify_role("Directora de RRHH", "c-level") == RoleType.HR


class TestSeniority:

    def test_c_level(self):
        assert is_c_level("C-Level")
        assert is_c_level("executive")
        assert not is_c_level("senior")
        assert not is_c_level(None)

    def test_senior_from_seniority(self):
        assert is_senior("Analista", "Senior")
        assert is_senior(None, "VP")

    def test_senior_from_title(self):
        assert is_senior("Directora Comercial", None)

    def test_not_senior(self):
        assert not is_senior("Analista", "junior")
        assert not is_senior(None, None)


class TestSizeBucket:

    @pytest.mark.parametrize("raw, expected", [
        ("1-10", SizeBucket.SMALL),
        ("11-50", SizeBucket.SMALL),
        ("51-200", SizeBucket.MEDIUM),
        ("201-1000", SizeBucket.LARGE),
        ("200+", SizeBucket.LARGE),
        ("1000+", SizeBucket.ENTERPRISE),
        ("1.000+", SizeBucket.ENTERPRISE),
        ("35", SizeBucket.SMALL),
        ("5000", SizeBucket.ENTERPRISE),
        ("Mediana", SizeBucket.MEDIUM),
        ("Pequeña", SizeBucket.SMALL),
        ("startup", SizeBucket.STARTUP),
        ("Enterprise", SizeBucket.ENTERPRISE),
        ("grande", SizeBucket.LARGE),
    ])
    def test_vocabulary(self, raw, expected):
        assert normalize_size_bucket(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "desconocido"])
    def test_unknown_defaults_to_small(self, raw):
        assert normalize_size_bucket(raw) == SizeBucket.SMALL


class TestIndustryFit:

    @pytest.mark.parametrize("industry, expected", [
        ("Retail", 20),
        ("Restaurantes", 20),
        ("Logística", 20),
        ("Software", 10),
        ("Consultoría", 10),
        ("Banca", -15),
        ("Gobierno", -15),
        ("Agricultura", 0),
        (None, 0),
    ])
    def test_adjustments(self, industry, expected):
        assert industry_fit_adjustment(industry) == expected

    def test_highest_matching_keyword_wins(self):
        assert industry_fit_adjustment("Servicios financieros") == 20
