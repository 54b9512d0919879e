"""Tests for pagescribe.analysis classifier and assertions."""
from __future__ import annotations

import pytest

from pagescribe.analysis import (
    PageClassifier,
    calculate_confidence,
    classify,
    classify_features,
    suggest_assertions,
)
from pagescribe.config import ClassifierConfig
from pagescribe.models import PageFeatures

LOGIN_PAGE = """
<form>
  <input type="email" name="email">
  <input type="password" name="password">
  <button type="submit">Sign in</button>
</form>
"""

REGISTRATION_PAGE = """
<form>
  <input name="first_name">
  <input name="last_name">
  <input type="email" name="email">
  <input name="phone">
  <input type="password" name="password">
  <input type="password" name="confirm_password">
  <button type="submit">Create account</button>
</form>
"""

CONTACT_PAGE = """
<form>
  <input name="full_name">
  <input type="email" name="email">
  <textarea name="message"></textarea>
</form>
"""

SEARCH_PAGE = """
<input type="search" placeholder="Search">
<div class="results"><p>One</p><span>Two</span></div>
"""

TABLE_PAGE = """
<table>
  <thead><tr><th>Name</th><th>Email</th></tr></thead>
  <tbody><tr><td>Ann</td><td>a@x</td></tr><tr><td>Bob</td><td>b@x</td></tr></tbody>
</table>
"""

LIST_PAGE = """
<div class="product-grid">
  <article>A</article><article>B</article><article>C</article><article>D</article>
</div>
"""

DETAIL_PAGE = """
<h1>Blue Mug</h1>
<main><img src="mug.png" alt="mug"><p>Ceramic, 350ml.</p></main>
"""


class TestDecisionList:
    """Tests for classify_features rule order."""

    @pytest.mark.parametrize(
        "features,expected",
        [
            (PageFeatures(has_password_field=True, form_field_count=2), "login-form"),
            (
                PageFeatures(has_password_field=True, has_confirm_password=True, form_field_count=6),
                "registration-form",
            ),
            (PageFeatures(has_email_field=True, has_textarea=True), "contact-form"),
            (PageFeatures(has_search_input=True, has_results_container=True), "search"),
            (PageFeatures(has_table=True), "table"),
            (PageFeatures(has_list=True), "list"),
            (PageFeatures(has_single_h1=True, has_main_content=True), "detail"),
            (PageFeatures(), "generic"),
        ],
    )
    def test_each_rule(self, features, expected):
        assert classify_features(features) == expected

    def test_login_wins_over_later_rules(self):
        features = PageFeatures(
            has_password_field=True,
            form_field_count=3,
            has_table=True,
            has_list=True,
            has_single_h1=True,
            has_main_content=True,
        )
        assert classify_features(features) == "login-form"

    def test_too_many_fields_is_not_login(self):
        features = PageFeatures(has_password_field=True, form_field_count=5)
        assert classify_features(features) == "generic"

    def test_confirm_with_few_fields_is_neither(self):
        features = PageFeatures(has_password_field=True, has_confirm_password=True, form_field_count=3)
        assert classify_features(features) == "generic"

    def test_contact_requires_no_password(self):
        features = PageFeatures(
            has_email_field=True, has_textarea=True, has_password_field=True, form_field_count=8
        )
        assert classify_features(features) != "contact-form"

    def test_search_needs_results(self):
        assert classify_features(PageFeatures(has_search_input=True)) == "generic"

    def test_login_field_limit_configurable(self):
        features = PageFeatures(has_password_field=True, form_field_count=6)
        classifier = PageClassifier(ClassifierConfig(login_max_fields=6))
        assert classifier.classify_features(features) == "login-form"


class TestConfidence:
    """Tests for calculate_confidence."""

    def test_generic_is_fixed(self):
        assert calculate_confidence("generic", PageFeatures(has_table=True)) == 30

    def test_login_full_score(self):
        features = PageFeatures(has_password_field=True, has_email_field=True, form_field_count=2)
        assert calculate_confidence("login-form", features) == 100

    def test_login_username_counts_as_identifier(self):
        features = PageFeatures(has_password_field=True, has_username_field=True, form_field_count=2)
        assert calculate_confidence("login-form", features) == 100

    def test_login_without_identifier(self):
        features = PageFeatures(has_password_field=True, form_field_count=1)
        assert calculate_confidence("login-form", features) == 85

    def test_table_and_list(self):
        assert calculate_confidence("table", PageFeatures(has_table=True)) == 90
        assert calculate_confidence("list", PageFeatures(has_list=True)) == 85

    def test_detail_with_and_without_images(self):
        base = PageFeatures(has_single_h1=True, has_main_content=True)
        assert calculate_confidence("detail", base) == 85
        assert calculate_confidence("detail", base.model_copy(update={"has_images": True})) == 95

    def test_capped_at_100(self):
        features = PageFeatures(
            has_password_field=True, has_confirm_password=True, form_field_count=9
        )
        assert calculate_confidence("registration-form", features) == 100

    def test_within_bounds(self):
        for page_type in ("login-form", "search", "table", "list", "detail", "contact-form"):
            value = calculate_confidence(page_type, PageFeatures())
            assert 0 <= value <= 100


class TestSuggestAssertions:
    """Tests for assertion templates."""

    @pytest.mark.parametrize(
        "page_type",
        ["login-form", "registration-form", "contact-form", "search", "table", "list", "detail", "generic"],
    )
    def test_accessibility_always_last(self, page_type):
        assertions = suggest_assertions(page_type)
        assert len(assertions) >= 2
        assert assertions[-1].type == "accessibility"
        assert sum(1 for a in assertions if a.type == "accessibility") == 1

    def test_login_templates(self):
        descriptions = [a.description for a in suggest_assertions("login-form")]
        assert descriptions == [
            "Verify login form fields are visible",
            "Test empty submission shows error",
            "Test invalid email validation",
            "Run accessibility audit",
        ]

    def test_generic_templates(self):
        assertions = suggest_assertions("generic")
        assert [a.type for a in assertions] == ["visibility", "accessibility"]
        assert "body" in assertions[0].code

    def test_returns_fresh_list(self):
        first = suggest_assertions("table")
        first.clear()
        assert suggest_assertions("table")


class TestClassifyDocuments:
    """End-to-end classification of sample pages."""

    def test_login_page(self, make_doc):
        result = classify(make_doc(LOGIN_PAGE))
        assert result.page_type == "login-form"
        assert result.confidence >= 90
        assert result.features.form_field_count == 2
        assert any(a.type == "form-validation" for a in result.suggested_assertions)

    def test_registration_page(self, make_doc):
        result = classify(make_doc(REGISTRATION_PAGE))
        assert result.page_type == "registration-form"
        assert result.features.has_confirm_password is True
        assert result.features.form_field_count == 6
        assert result.confidence == 100

    def test_contact_page(self, make_doc):
        result = classify(make_doc(CONTACT_PAGE))
        assert result.page_type == "contact-form"
        assert result.confidence == 100

    def test_search_page(self, make_doc):
        result = classify(make_doc(SEARCH_PAGE))
        assert result.page_type == "search"
        assert result.confidence == 100

    def test_table_page(self, make_doc):
        result = classify(make_doc(TABLE_PAGE))
        assert result.page_type == "table"
        assert result.confidence == 90

    def test_list_page(self, make_doc):
        result = classify(make_doc(LIST_PAGE))
        assert result.page_type == "list"
        assert result.confidence == 85

    def test_detail_page(self, make_doc):
        result = classify(make_doc(DETAIL_PAGE))
        assert result.page_type == "detail"
        assert result.confidence == 95

    def test_generic_page(self, make_doc):
        result = classify(make_doc("<p>Hello</p>"))
        assert result.page_type == "generic"
        assert result.confidence == 30
        assert result.suggested_assertions[-1].type == "accessibility"

    def test_accepts_raw_html(self):
        result = classify("<html><body><table><tr><th>a</th></tr><tr><td>b</td></tr></table></body></html>")
        assert result.page_type == "table"

    def test_deterministic(self, make_doc):
        doc = make_doc(REGISTRATION_PAGE)
        assert classify(doc) == classify(doc)

    def test_config_passed_through(self, make_doc):
        result = classify(make_doc(REGISTRATION_PAGE), ClassifierConfig(login_max_fields=10))
        assert result.page_type == "generic"
