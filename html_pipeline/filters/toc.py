# html_pipeline/filters/toc.py
"""
Filter that adds anchors to headings and builds a table of contents.

This filter:
- Inserts an <a class="anchor" aria-hidden="true"> as the first child of every h1-h6
- Gives each anchor a unique slug derived from the heading text
- Suffixes duplicate slugs with -1, -2, ... in document order
- Stores a flat <ul class="section-nav"> list of links in ``result["toc"]``

Context:
    anchor_icon (optional): Markup placed inside each anchor. Defaults to an
        octicon link span
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Optional

from bs4 import BeautifulSoup
from django.utils.encoding import escape_uri_path
from django.utils.html import format_html

from .base import Filter
from .utils import parse_fragment

logger = logging.getLogger(__name__)

HEADING_TAGS = [f"h{i}" for i in range(1, 7)]

DEFAULT_ANCHOR_ICON = '<span aria-hidden="true" class="octicon octicon-link"></span>'

# Letters, combining marks, numbers and connector punctuation (e.g. "_")
SLUG_CATEGORIES = ("L", "M", "N", "Pc")


def _keep_in_slug(char: str) -> bool:
    if char == "-" or char.isspace():
        return True
    category = unicodedata.category(char)
    return category[0] in SLUG_CATEGORIES or category in SLUG_CATEGORIES


def slugify_heading(text: str) -> str:
    """
    Convert heading text to a URL-safe slug.

    Unicode letters and combining marks are kept so headings in other
    scripts keep their own characters. Whitespace runs become a single "-".
    """
    slug = "".join(char for char in text.lower() if _keep_in_slug(char))
    slug = re.sub(r"\s+", "-", slug).strip("-")
    return slug or "section"


class SlugRegistry:
    """Tracks slugs issued within one document and disambiguates duplicates."""

    def __init__(self):
        self.counts: dict[str, int] = {}
        self.issued: set[str] = set()

    def issue(self, base: str) -> str:
        """Return base the first time, then base-1, base-2, ..."""
        count = self.counts.get(base, 0)
        slug = base if count == 0 else f"{base}-{count}"
        while slug in self.issued:
            count += 1
            slug = f"{base}-{count}"
        self.counts[base] = count + 1
        self.issued.add(slug)
        return slug

    def reset(self) -> None:
        self.counts.clear()
        self.issued.clear()


def generate_anchors(
    doc: BeautifulSoup, anchor_icon: Optional[str] = None
) -> tuple[BeautifulSoup, str]:
    """
    Add anchors to every heading and build the table of contents.

    Args:
        doc: Parsed document, mutated in place
        anchor_icon: Markup for the anchor contents (default: octicon link span)

    Returns:
        The document and the table of contents markup ("" without headings)
    """
    icon = anchor_icon if anchor_icon is not None else DEFAULT_ANCHOR_ICON
    registry = SlugRegistry()
    items = []

    for heading in doc.find_all(HEADING_TAGS):
        text = heading.get_text()
        slug = registry.issue(slugify_heading(text))
        href = f"#{escape_uri_path(slug)}"

        anchor = doc.new_tag("a")
        anchor["id"] = slug
        anchor["class"] = ["anchor"]
        anchor["href"] = href
        anchor["aria-hidden"] = "true"
        for node in parse_fragment(icon):
            anchor.append(node)
        heading.insert(0, anchor)

        items.append(format_html('<li><a href="{}">{}</a></li>\n', href, text))

    if not items:
        return doc, ""

    logger.debug(f"Anchored {len(items)} headings")
    return doc, f'<ul class="section-nav">\n{"".join(items)}</ul>'


class TableOfContentsFilter(Filter):
    def call(self, doc, context, result):
        doc, toc = generate_anchors(doc, context.get("anchor_icon"))
        if toc:
            result["toc"] = toc
        return doc
