# tests/test_sanitization.py

"""
Tests for input sanitization and sanitize-then-validate.
"""

from core.rules import CATEGORY_RULES, DOCUMENT_RULES
from core.utils import escape_html, sanitize_input, sanitize_object
from core.validation import validate_and_sanitize
from models.validation import SanitizeOptions


def test_escapes_html_characters():
    raw = """  <a href="x">Tom & 'Jerry'</a>  """
    assert sanitize_input(raw) == (
        "&lt;a href=&quot;x&quot;&gt;Tom &amp; &#x27;Jerry&#x27;&lt;/a&gt;"
    )


def test_ampersand_escaped_first():
    assert escape_html("<") == "&lt;"
    assert escape_html("&lt;") == "&amp;lt;"


def test_escaping_twice_is_not_idempotent():
    once = sanitize_input("Dupont & Fils")
    twice = sanitize_input(once)
    assert once == "Dupont &amp; Fils"
    assert twice == "Dupont &amp;amp; Fils"
    assert twice != once


def test_plain_text_is_stable():
    text = "Registre des naissances 1950"
    assert sanitize_input(sanitize_input(text)) == sanitize_input(text) == text


def test_truncates_before_escaping():
    assert sanitize_input("<abcdef", max_length=3) == "&lt;ab"


def test_trim_happens_before_truncation():
    assert sanitize_input("   abcdef", max_length=3) == "abc"


def test_trim_can_be_disabled():
    assert sanitize_input("  x ", trim=False) == "  x "


def test_allow_html_keeps_safe_tags_only():
    raw = '<p onclick="evil()">Bonjour <b>à tous</b></p><script>alert(1)</script>'
    assert sanitize_input(raw, allow_html=True) == "<p>Bonjour <b>à tous</b></p>"


def test_allow_html_strips_unknown_tags_and_attributes():
    raw = '<div class="box"><em style="color:red">note</em> <a href="http://x">lien</a></div>'
    assert sanitize_input(raw, allow_html=True) == "<em>note</em> lien"


def test_sanitize_object_per_field_rules():
    data = {
        "title": "  <b>Acte</b>  ",
        "description": "<i>copie</i><img src=x>",
        "tags": ["  état civil ", 3, "<x>"],
        "size": 12,
        "is_archived": False,
        "metadata": {"pages": 2},
    }
    rules = {
        "description": {"allowHTML": True},
        "tags": SanitizeOptions(max_length=4),
    }

    clean = sanitize_object(data, rules)

    assert clean == {
        "title": "&lt;b&gt;Acte&lt;/b&gt;",
        "description": "<i>copie</i>",
        "tags": ["état", 3, "&lt;x&gt;"],
        "size": 12,
        "is_archived": False,
        "metadata": {"pages": 2},
    }


def test_sanitize_object_does_not_mutate_input():
    data = {"title": " x ", "tags": [" a "]}
    sanitize_object(data)
    assert data == {"title": " x ", "tags": [" a "]}


def test_validate_and_sanitize_returns_clean_data():
    result = validate_and_sanitize(
        {"name": "  Contrats  ", "color": "#A1B2C3"},
        CATEGORY_RULES,
    )
    assert result.is_valid is True
    assert result.errors == {}
    assert result.sanitized_data == {"name": "Contrats", "color": "#A1B2C3"}


def test_validate_and_sanitize_validates_sanitized_values():
    # Whitespace-only becomes empty after trimming, so "required" fires
    result = validate_and_sanitize({"name": "   "}, CATEGORY_RULES)
    assert result.is_valid is False
    assert result.errors == {"name": ["Ce champ est obligatoire"]}
    assert result.sanitized_data == {"name": ""}


def test_validate_and_sanitize_measures_escaped_text():
    # 198 chars + "<>" escapes to 206 chars, over the 200 limit
    title = "a" * 198 + "<>"
    result = validate_and_sanitize({"title": title, "category": "x"}, DOCUMENT_RULES)
    assert result.errors == {"title": ["Maximum 200 caractères autorisés"]}

    truncated = validate_and_sanitize(
        {"title": title, "category": "x"},
        DOCUMENT_RULES,
        {"title": {"maxLength": 198}},
    )
    assert truncated.is_valid is True
    assert truncated.sanitized_data["title"] == "a" * 198
