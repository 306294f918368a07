# html_pipeline/filters/__init__.py

from .base import Filter, FunctionFilter
from .emoji import EmojiFilter
from .emoji_vocabulary import DEFAULT_VOCABULARY, EmojiVocabulary
from .mention import MentionFilter, mentioned_logins_in
from .toc import SlugRegistry, TableOfContentsFilter, generate_anchors, slugify_heading
from .utils import has_ancestor, parse_html, to_html, walk_text_nodes

DEFAULT_FILTERS = [
    MentionFilter,  # Link @mentions to user profiles
    EmojiFilter,  # Replace :emoji: codes with images
    TableOfContentsFilter,  # Heading anchors and the section-nav list
    # Order matters - they run sequentially
]

__all__ = [
    "DEFAULT_FILTERS",
    "DEFAULT_VOCABULARY",
    "EmojiFilter",
    "EmojiVocabulary",
    "Filter",
    "FunctionFilter",
    "MentionFilter",
    "SlugRegistry",
    "TableOfContentsFilter",
    "generate_anchors",
    "has_ancestor",
    "mentioned_logins_in",
    "parse_html",
    "slugify_heading",
    "to_html",
    "walk_text_nodes",
]
