# core/utils.py

from typing import Any, Dict, Mapping, Optional, Union

import nh3

from models.validation import SanitizeOptions


SAFE_HTML_TAGS = frozenset({"b", "i", "em", "strong", "u", "br", "p"})

# `&` must come first or it would re-escape the entities emitted below
HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
)

SanitizeRule = Union[SanitizeOptions, Mapping[str, Any]]


def escape_html(value: str) -> str:
    for char, entity in HTML_ESCAPES:
        value = value.replace(char, entity)
    return value


def clean_html(value: str) -> str:
    """Keep only the safe inline tags, with no attributes at all."""
    return nh3.clean(
        value,
        tags=set(SAFE_HTML_TAGS),
        attributes={"*": set()},
        strip_comments=True,
        link_rel=None,
    )


def sanitize_input(
    value: str,
    allow_html: bool = False,
    max_length: Optional[int] = None,
    trim: bool = True,
) -> str:
    """
    Make untrusted text safe to store and display.
    - Trim surrounding whitespace (default)
    - Hard-cut to max_length (no ellipsis)
    - allow_html: strip to the safe tag allow-list
      otherwise: escape & < > " ' as HTML entities

    Escaping is not idempotent: sanitizing twice re-escapes the `&`
    of entities produced by the first pass.
    """
    sanitized = value

    if trim:
        sanitized = sanitized.strip()

    if max_length:
        sanitized = sanitized[:max_length]

    if allow_html:
        return clean_html(sanitized)
    return escape_html(sanitized)


def _options(rule: Optional[SanitizeRule]) -> SanitizeOptions:
    if rule is None:
        return SanitizeOptions()
    if isinstance(rule, SanitizeOptions):
        return rule
    return SanitizeOptions.model_validate(dict(rule))


def sanitize(value: str, rule: Optional[SanitizeRule] = None) -> str:
    opts = _options(rule)
    return sanitize_input(
        value,
        allow_html=opts.allow_html,
        max_length=opts.max_length,
        trim=opts.trim,
    )


def sanitize_object(
    data: Mapping[str, Any],
    rules: Optional[Mapping[str, SanitizeRule]] = None,
) -> Dict[str, Any]:
    """
    Sanitize every string field, and every string inside list fields,
    with that field's rule (or the defaults). Other values pass through.
    Returns a new dict.
    """
    rules = rules or {}
    clean = {}

    for key, value in data.items():
        if isinstance(value, str):
            clean[key] = sanitize(value, rules.get(key))
            continue

        if isinstance(value, list):
            rule = rules.get(key)
            clean[key] = [
                sanitize(item, rule) if isinstance(item, str) else item
                for item in value
            ]
            continue

        clean[key] = value

    return clean
