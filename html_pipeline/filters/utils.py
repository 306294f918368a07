"""Parsing helpers and the text-node walker shared by the content filters."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import (
    PageElement,
    PreformattedString,
    Script,
    Stylesheet,
    TemplateString,
)
from django.utils.html import escape

from ..exceptions import MalformedInputError

logger = logging.getLogger(__name__)

PARSER = "html.parser"


def parse_html(value) -> BeautifulSoup:
    """
    Return a BeautifulSoup document for the given input.

    Documents are returned unchanged so filters can be chained without
    re-parsing. Strings and bytes are parsed with the stdlib html.parser.
    """
    if isinstance(value, BeautifulSoup):
        return value
    if not isinstance(value, (str, bytes)):
        raise MalformedInputError(
            f"Cannot build a document from {type(value).__name__}"
        )
    try:
        return BeautifulSoup(value, PARSER)
    except ParserRejectedMarkup as e:
        raise MalformedInputError(f"Parser rejected markup: {e}") from e


def parse_fragment(markup: str) -> list[PageElement]:
    """Parse a markup fragment and return its top-level nodes, detached."""
    fragment = BeautifulSoup(markup, PARSER)
    return [node.extract() for node in list(fragment.contents)]


def to_html(doc: BeautifulSoup) -> str:
    """Serialise a document back to HTML."""
    return str(doc) if doc is not None else ""


def join_url(base: str, path: str) -> str:
    """Join two URL parts with exactly one slash between them."""
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def is_text_node(node) -> bool:
    """
    True for plain text nodes.

    Comments, CDATA, doctypes and the raw contents of <script>, <style> and
    <template> are not prose and are excluded.
    """
    return isinstance(node, NavigableString) and not isinstance(
        node, (PreformattedString, Script, Stylesheet, TemplateString)
    )


def has_ancestor(node: PageElement, tags: Iterable[str]) -> bool:
    """Check whether any ancestor of node is one of the given tag names."""
    tags = set(tags)
    for parent in node.parents:
        if isinstance(parent, Tag) and parent.name in tags:
            return True
    return False


def walk_text_nodes(
    doc: BeautifulSoup,
    ignored_tags: Iterable[str],
    transform: Callable[[str], Optional[str]],
    trigger: Optional[str] = None,
) -> int:
    """
    Run transform over every text node and splice in the markup it returns.

    Text nodes are collected up front in document order, so nodes inserted
    by a replacement are not visited again in the same pass.

    Args:
        doc: Parsed document, mutated in place
        ignored_tags: Tag names whose descendants are never transformed
        transform: Receives the node's text, HTML-escaped. Returns markup,
            or None / the unchanged text to leave the node alone
        trigger: Optional substring the raw text must contain

    Returns:
        Number of text nodes replaced
    """
    ignored_tags = frozenset(ignored_tags)
    text_nodes = [node for node in doc.find_all(string=True) if is_text_node(node)]

    replaced = 0
    for node in text_nodes:
        text = str(node)
        if trigger and trigger not in text:
            continue
        if has_ancestor(node, ignored_tags):
            continue

        content = escape(text)
        html = transform(content)
        if html is None or html == content:
            continue

        node.replace_with(*parse_fragment(html))
        replaced += 1

    if replaced:
        logger.debug(f"Replaced {replaced} of {len(text_nodes)} text nodes")
    return replaced
