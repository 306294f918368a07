"""
Base classes for pipeline filters.

A filter receives the parsed document, the run context and the shared result
mapping, and returns the document for the next filter. Filters declare the
context keys they require in ``needs``; the pipeline checks them through
``validate`` before anything runs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, MutableMapping, Optional

from bs4 import BeautifulSoup


class Filter(ABC):
    """A single document transformation stage."""

    #: Context keys that must be present (and not None) for the filter to run
    needs: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return type(self).__name__

    def validate(self, context: dict) -> list[str]:
        """
        Return the context keys that are missing or invalid.

        An empty list means the filter can run. Subclasses with stricter
        requirements should extend the list returned here.
        """
        return [key for key in self.needs if context.get(key) is None]

    @abstractmethod
    def call(
        self,
        doc: BeautifulSoup,
        context: dict,
        result: MutableMapping[str, Any],
    ) -> BeautifulSoup:
        """Transform doc and return it."""

    def __repr__(self) -> str:
        return f"<{self.name}>"


class FunctionFilter(Filter):
    """
    Adapt a plain ``func(doc, context, result)`` callable to the Filter contract.

    Example:
        >>> def add_lang(doc, context, result):
        ...     doc.find("html")["lang"] = context["lang"]
        ...     return doc
        >>> FunctionFilter(add_lang, needs=["lang"])
    """

    def __init__(
        self,
        func: Callable[[BeautifulSoup, dict, MutableMapping[str, Any]], BeautifulSoup],
        name: Optional[str] = None,
        needs: Iterable[str] = (),
    ):
        self.func = func
        self.needs = tuple(needs)
        self._name = name or getattr(func, "__name__", type(func).__name__)

    @property
    def name(self) -> str:
        return self._name

    def call(self, doc, context, result):
        return self.func(doc, context, result)
