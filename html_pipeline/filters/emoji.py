# html_pipeline/filters/emoji.py
"""
Filter that replaces :emoji: codes with images.

This filter:
- Replaces every :name: found in the vocabulary with an <img class="emoji">
- Builds image URLs from ``asset_root`` and an optional ``asset_path`` template
- Ignores text inside <pre>, <code> and <tt> elements (extendable)
- Lets callers override, compute or remove attributes of the generated image

Context:
    asset_root (required): Base URL of the emoji images
    asset_path (optional): Path template; ":file_name" is replaced with the
        image filename. Defaults to "emoji/:file_name"
    ignored_ancestor_tags (optional): Extra tag names to skip
    img_attrs (optional): Attribute overrides. None removes an attribute,
        callables are called with the emoji name
"""

from __future__ import annotations

import logging
from typing import Optional

from django.utils.html import format_html_join

from .base import Filter
from .emoji_vocabulary import DEFAULT_VOCABULARY, EmojiVocabulary
from .utils import join_url, walk_text_nodes

logger = logging.getLogger(__name__)

DEFAULT_IGNORED_ANCESTOR_TAGS = ("pre", "code", "tt")


class EmojiFilter(Filter):
    needs = ("asset_root",)

    def __init__(self, vocabulary: Optional[EmojiVocabulary] = None):
        self.vocabulary = vocabulary if vocabulary is not None else DEFAULT_VOCABULARY

    def call(self, doc, context, result):
        replaced = walk_text_nodes(
            doc,
            self.ignored_ancestor_tags(context),
            lambda text: self.emoji_image_filter(text, context),
            trigger=":",
        )
        logger.debug(f"Emojified {replaced} text nodes")
        return doc

    def emoji_image_filter(self, text: str, context: dict) -> str:
        """Replace :emoji: in text with image tags."""
        return self.vocabulary.pattern.sub(
            lambda match: self.emoji_image_tag(match.group(1), context), text
        )

    def emoji_url(self, name: str, context: dict) -> str:
        return join_url(context["asset_root"], self.asset_path(name, context))

    def asset_path(self, name: str, context: dict) -> str:
        filename = self.vocabulary.filename_for(name)
        if context.get("asset_path"):
            return context["asset_path"].replace(":file_name", filename)
        return join_url("emoji", filename)

    def default_img_attrs(self, name: str, context: dict) -> dict:
        return {
            "class": "emoji",
            "title": f":{name}:",
            "alt": f":{name}:",
            "src": self.emoji_url(name, context),
            "height": "20",
            "width": "20",
            "align": "absmiddle",
        }

    def emoji_image_tag(self, name: str, context: dict) -> str:
        attrs = self.default_img_attrs(name, context)
        attrs.update(context.get("img_attrs") or {})

        pairs = []
        for attr, value in attrs.items():
            if value is None:
                continue
            if callable(value):
                value = value(name)
            if isinstance(value, bool):
                value = str(value).lower()
            pairs.append((attr, value))

        html_attrs = format_html_join(" ", '{}="{}"', pairs)
        return f"<img {html_attrs}>"

    def ignored_ancestor_tags(self, context: dict) -> list[str]:
        extra = context.get("ignored_ancestor_tags") or ()
        return list(dict.fromkeys([*DEFAULT_IGNORED_ANCESTOR_TAGS, *extra]))
