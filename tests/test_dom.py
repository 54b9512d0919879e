"""Tests for pagescribe.dom package."""
from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from pagescribe.dom import PageDocument, accessible_name, implicit_role, owner_document, snapshot_element
from pagescribe.dom.element import class_list, direct_text, get_attr, parent_element
from pagescribe.models import Rect


class TestPageDocument:
    """Tests for PageDocument wrapper."""

    def test_query_all_and_one(self, make_doc):
        doc = make_doc("<p class='a'>1</p><p class='a'>2</p>")
        assert len(doc.query_all("p.a")) == 2
        assert doc.query_one("p.a").get_text() == "1"

    def test_get_element_by_id(self, make_doc):
        doc = make_doc("<div id='x'>hi</div>")
        assert doc.get_element_by_id("x").get_text() == "hi"
        assert doc.get_element_by_id("missing") is None
        assert doc.get_element_by_id("") is None

    def test_document_element_and_body(self, make_doc):
        doc = make_doc("<span>x</span>")
        assert doc.document_element.name == "html"
        assert doc.body.name == "body"

    def test_title(self, make_doc):
        doc = make_doc("", head="<title> Sign in </title>")
        assert doc.title == "Sign in"

    def test_wrap_variants(self, make_doc):
        doc = make_doc("<b>x</b>")
        assert PageDocument.wrap(doc) is doc
        assert PageDocument.wrap(doc.soup).soup is doc.soup
        assert PageDocument.wrap(doc.query_one("b")).soup is doc.soup
        assert PageDocument.wrap("<p>x</p>").query_one("p") is not None

    def test_wrap_rejects_unknown(self):
        with pytest.raises(TypeError):
            PageDocument.wrap(42)

    def test_owner_document(self, make_doc):
        doc = make_doc("<div><i>x</i></div>")
        assert owner_document(doc.query_one("i")) is doc.soup

    def test_bounding_rect_uses_provider(self):
        doc = PageDocument.from_html(
            "<button>x</button>",
            geometry=lambda el: Rect(x=1, y=2, width=30, height=10),
        )
        assert doc.bounding_rect(doc.query_one("button")).width == 30

    def test_bounding_rect_without_provider(self, make_doc):
        doc = make_doc("<button>x</button>")
        assert doc.bounding_rect(doc.query_one("button")) is None


class TestElementFacts:
    """Tests for element read helpers."""

    def test_direct_text_skips_children_and_comments(self, make_doc):
        doc = make_doc("<button> Save <span>draft</span><!-- note --> </button>")
        assert direct_text(doc.query_one("button")) == "Save"

    def test_direct_text_none_when_only_children(self, make_doc):
        doc = make_doc("<a><span>Home</span></a>")
        assert direct_text(doc.query_one("a")) is None

    def test_class_list(self, make_doc):
        doc = make_doc("<div class='  a  b-c '></div>")
        assert class_list(doc.query_one("div")) == ["a", "b-c"]

    def test_get_attr_joins_multivalued(self, make_doc):
        doc = make_doc("<div class='a b'></div>")
        assert get_attr(doc.query_one("div"), "class") == "a b"

    def test_parent_element_stops_at_document(self, make_doc):
        doc = make_doc("")
        assert parent_element(doc.document_element) is None

    @pytest.mark.parametrize(
        "markup,role",
        [
            ("<button>x</button>", "button"),
            ("<a href='#'>x</a>", "link"),
            ("<input type='submit'>", "button"),
            ("<input type='checkbox'>", "checkbox"),
            ("<input type='search'>", "searchbox"),
            ("<input>", "textbox"),
            ("<select></select>", "combobox"),
            ("<ul><li>x</li></ul>", "list"),
            ("<div>x</div>", None),
        ],
    )
    def test_implicit_role(self, make_doc, markup, role):
        doc = make_doc(markup)
        el = doc.body.find(True)
        assert implicit_role(el) == role


class TestAccessibleName:
    """Tests for accessible_name resolution order."""

    def test_aria_label_first(self, make_doc):
        doc = make_doc("<button aria-label='Close dialog'>X</button>")
        assert accessible_name(doc, doc.query_one("button")) == "Close dialog"

    def test_aria_labelledby(self, make_doc):
        doc = make_doc("<h2 id='t'> Billing </h2><section aria-labelledby='t'>x</section>")
        assert accessible_name(doc, doc.query_one("section")) == "Billing"

    def test_label_for_form_control(self, make_doc):
        doc = make_doc("<label for='email'>Email address</label><input id='email'>")
        assert accessible_name(doc, doc.query_one("input")) == "Email address"

    def test_falls_back_to_direct_text(self, make_doc):
        doc = make_doc("<button>Submit</button>")
        assert accessible_name(doc, doc.query_one("button")) == "Submit"


class TestSnapshotElement:
    """Tests for snapshot_element."""

    def test_input_snapshot(self, make_doc):
        doc = make_doc("<input type='Email' name='mail' placeholder='you@x' class='field big' id='m'>")
        info = snapshot_element(doc, doc.query_one("input"))
        assert info.tag_name == "input"
        assert info.input_type == "email"
        assert info.name == "mail"
        assert info.placeholder == "you@x"
        assert info.class_list == ["field", "big"]
        assert info.attributes["class"] == "field big"
        assert info.implicit_role == "textbox"
        assert info.rect is None

    def test_text_content_truncated(self, make_doc):
        doc = make_doc(f"<p>{'word ' * 50}</p>")
        info = snapshot_element(doc, doc.query_one("p"))
        assert len(info.text_content) == 100

    def test_zero_width_rect_dropped(self):
        doc = PageDocument.from_html(
            "<button>x</button>",
            geometry=lambda el: Rect(x=0, y=0, width=0, height=0),
        )
        assert snapshot_element(doc, doc.query_one("button")).rect is None

    def test_plain_soup_document(self):
        soup = BeautifulSoup("<div role='tab' aria-label='One'>1</div>", "lxml")
        doc = PageDocument.wrap(soup)
        info = snapshot_element(doc, doc.query_one("div"))
        assert info.role == "tab"
        assert info.accessible_name == "One"
