# html_pipeline/pipeline.py
"""
Runs an ordered chain of filters over one HTML document.

    pipeline = Pipeline(
        [MentionFilter, EmojiFilter, TableOfContentsFilter],
        default_context={"base_url": "/users", "asset_root": "/assets"},
    )
    result = pipeline.run("Hello @mojombo :tada:")
    result["output"], result["mentioned_users"]

Every filter's requirements are validated before the document is parsed, so
a misconfigured pipeline fails without touching the input. Filters then run
strictly in order; each one receives the document returned by the previous
filter and the shared result mapping.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, MutableMapping, Optional, Union

from bs4 import BeautifulSoup

from .config import get_default_context
from .exceptions import ConfigurationError, FilterExecutionError, MalformedInputError
from .filters.base import Filter, FunctionFilter
from .filters.utils import parse_html, to_html
from .instrumentation import (
    AFTER_FILTER,
    AFTER_PIPELINE,
    BEFORE_FILTER,
    BEFORE_PIPELINE,
    InstrumentationService,
    NullInstrumentation,
    SignalInstrumentation,
)

logger = logging.getLogger(__name__)

FilterSpec = Union[Filter, type, Callable]


def _as_filter(spec: FilterSpec) -> Filter:
    """Coerce a filter instance, Filter subclass or plain callable to a Filter."""
    if isinstance(spec, Filter):
        return spec
    if isinstance(spec, type):
        if issubclass(spec, Filter):
            return spec()
        raise TypeError(f"{spec.__name__} is not a Filter subclass")
    if callable(spec):
        return FunctionFilter(spec)
    raise TypeError(f"Cannot use {spec!r} as a filter")


class Pipeline:
    """
    An ordered composition of filters.

    Args:
        filters: Filter instances, Filter subclasses (instantiated without
            arguments) or ``func(doc, context, result)`` callables
        default_context: Context used for every run; per-run context wins on
            conflicts. Defaults to the HTML_PIPELINE_CONTEXT setting
        result_class: Mapping type created for each run's result
        instrumentation: Service receiving pipeline and filter events
            (default: NullInstrumentation)
        instrumentation_name: Name published as the payload's "pipeline"
            (default: the class name)
    """

    def __init__(
        self,
        filters: Iterable[FilterSpec],
        default_context: Optional[dict] = None,
        result_class: Callable[[], MutableMapping[str, Any]] = dict,
        instrumentation: Optional[InstrumentationService] = None,
        instrumentation_name: Optional[str] = None,
    ):
        self.filters = [_as_filter(spec) for spec in filters]
        if default_context is None:
            default_context = get_default_context()
        self.default_context = dict(default_context)
        self.result_class = result_class
        self.instrumentation = instrumentation or NullInstrumentation()
        self.instrumentation_name = instrumentation_name or type(self).__name__

    @property
    def filter_names(self) -> list[str]:
        return [f.name for f in self.filters]

    def setup_instrumentation(
        self,
        name: Optional[str] = None,
        service: Optional[InstrumentationService] = None,
    ) -> None:
        """Set the published pipeline name and the instrumentation service."""
        self.instrumentation_name = name or self.instrumentation_name
        self.instrumentation = service or SignalInstrumentation()

    def run(
        self,
        html: Union[str, bytes, BeautifulSoup],
        context: Optional[dict] = None,
        result: Optional[MutableMapping[str, Any]] = None,
    ) -> MutableMapping[str, Any]:
        """
        Run every filter over html and return the result mapping.

        The final document is serialised into ``result["output"]``.

        Raises:
            ConfigurationError: A filter rejected the merged context
            MalformedInputError: html could not be parsed
            FilterExecutionError: A filter raised; the chain was aborted
        """
        _, result = self._run(html, context, result)
        return result

    def to_document(
        self,
        html: Union[str, bytes, BeautifulSoup],
        context: Optional[dict] = None,
        result: Optional[MutableMapping[str, Any]] = None,
    ) -> BeautifulSoup:
        """Run the pipeline and return the final document tree."""
        doc, _ = self._run(html, context, result)
        return doc

    def to_html(
        self,
        html: Union[str, bytes, BeautifulSoup],
        context: Optional[dict] = None,
        result: Optional[MutableMapping[str, Any]] = None,
    ) -> str:
        """Run the pipeline and return the rendered HTML."""
        return self.run(html, context, result)["output"]

    def validate(self, context: dict) -> None:
        """Raise ConfigurationError listing every filter that rejects context."""
        problems = {}
        for f in self.filters:
            missing = f.validate(context)
            if missing:
                problems[f.name] = missing
        if problems:
            error = ConfigurationError(problems)
            logger.error(f"{self.instrumentation_name}: {error}")
            raise error

    def _run(self, html, context, result):
        context = {**self.default_context, **(context or {})}
        result = result if result is not None else self.result_class()

        self.validate(context)
        try:
            doc = parse_html(html)
        except MalformedInputError as error:
            logger.error(f"{self.instrumentation_name}: {error}")
            raise

        payload = {
            "pipeline": self.instrumentation_name,
            "filters": self.filter_names,
            "context": context,
            "result": result,
        }
        self._publish(BEFORE_PIPELINE, payload)
        start = time.perf_counter()

        for f in self.filters:
            doc = self._call_filter(f, doc, context, result)

        result["output"] = to_html(doc)
        self._publish(
            AFTER_PIPELINE, {**payload, "duration": time.perf_counter() - start}
        )
        return doc, result

    def _call_filter(self, f: Filter, doc, context, result):
        payload = {
            "pipeline": self.instrumentation_name,
            "filter": f.name,
            "context": context,
            "result": result,
        }
        self._publish(BEFORE_FILTER, payload)
        start = time.perf_counter()

        try:
            output = f.call(doc, context, result)
            if not isinstance(output, BeautifulSoup):
                raise TypeError(
                    f"{f.name} returned {type(output).__name__} instead of a document"
                )
        except Exception as e:
            duration = time.perf_counter() - start
            logger.error(
                f"{self.instrumentation_name}: filter {f.name} failed after {duration:.4f}s",
                exc_info=True,
            )
            self._publish(AFTER_FILTER, {**payload, "duration": duration, "error": e})
            raise FilterExecutionError(f.name, result) from e

        duration = time.perf_counter() - start
        logger.debug(f"{self.instrumentation_name}: {f.name} took {duration:.4f}s")
        self._publish(AFTER_FILTER, {**payload, "duration": duration})
        return output

    def _publish(self, event: str, payload: dict) -> None:
        try:
            self.instrumentation.publish(event, payload)
        except Exception:
            logger.warning(
                f"Instrumentation failed for '{event}' in {self.instrumentation_name}",
                exc_info=True,
            )
