"""Lookup tables mapping emoji names to image filenames."""

from __future__ import annotations

import re
from functools import cached_property
from types import MappingProxyType
from typing import Mapping

import emoji

# Emoji presentation selector, not part of gemoji filenames
VARIATION_SELECTOR_16 = "\ufe0f"


class EmojiVocabulary:
    """
    An immutable table of valid emoji names and their image filenames.

    Names are matched case-sensitively. Filenames are relative to the emoji
    asset directory (e.g. "unicode/1f604.png").
    """

    def __init__(self, filenames: Mapping[str, str]):
        self._filenames = MappingProxyType(dict(filenames))

    @classmethod
    def from_codepoints(cls, codepoints: Mapping[str, str], custom: Mapping[str, str] | None = None):
        """
        Build a vocabulary from name -> hex codepoint(s) pairs.

        Filenames follow the gemoji layout: "unicode/<codepoints>.png".
        ``custom`` maps names of non-Unicode emoji straight to filenames.
        """
        filenames = {name: f"unicode/{code.lower()}.png" for name, code in codepoints.items()}
        filenames.update(custom or {})
        return cls(filenames)

    @classmethod
    def from_emoji_data(cls, data: Mapping[str, dict] | None = None, custom: Mapping[str, str] | None = None):
        """
        Build a vocabulary from the `emoji` package's EMOJI_DATA table.

        Every English name and alias becomes a valid name. Fully-qualified
        sequences win over their minimally-qualified variants, and VS16
        selectors are dropped from filenames as in the gemoji layout.
        """
        if data is None:
            data = emoji.EMOJI_DATA

        filenames = {}
        for char, info in sorted(data.items(), key=lambda item: item[1].get("status", 0)):
            filename = "unicode/" + "-".join(f"{ord(c):x}" for c in char if c != VARIATION_SELECTOR_16) + ".png"
            for name in [info.get("en"), *info.get("alias", [])]:
                if name:
                    filenames.setdefault(name.strip(":"), filename)
        filenames.update(custom or {})
        return cls(filenames)

    def names(self) -> frozenset[str]:
        return frozenset(self._filenames)

    def filename_for(self, name: str) -> str:
        return self._filenames[name]

    def __contains__(self, name: object) -> bool:
        return name in self._filenames

    def __len__(self) -> int:
        return len(self._filenames)

    @cached_property
    def pattern(self) -> re.Pattern:
        """Regex matching :name: for every name in the vocabulary."""
        if not self._filenames:
            # Matches nothing
            return re.compile(r"(?!x)x")
        alternatives = "|".join(re.escape(name) for name in sorted(self._filenames))
        return re.compile(f":({alternatives}):")


DEFAULT_VOCABULARY = EmojiVocabulary.from_emoji_data(
    custom={
        "octocat": "octocat.png",
        "shipit": "shipit.png",
    },
)
