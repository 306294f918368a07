# html_pipeline/exceptions.py
"""
Errors raised by the filter pipeline.

- ConfigurationError: a filter is missing required context keys (raised before any filter runs)
- FilterExecutionError: a filter raised while processing the document
- MalformedInputError: the input could not be parsed into a document
"""

from __future__ import annotations

from typing import Any, Mapping


class PipelineError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(PipelineError):
    """
    One or more filters rejected the run context.

    Attributes:
        problems: Mapping of filter name to the context keys that are missing
            or hold an invalid value
    """

    def __init__(self, problems: Mapping[str, list[str]]):
        self.problems = {name: list(keys) for name, keys in problems.items()}
        details = "; ".join(
            f"{name}: missing or invalid {', '.join(repr(key) for key in keys)}"
            for name, keys in self.problems.items()
        )
        super().__init__(f"Invalid context for filters: {details}")


class FilterExecutionError(PipelineError):
    """
    A filter raised during execution and the chain was aborted.

    The original exception is available as ``__cause__``. ``partial_result``
    holds whatever earlier filters wrote; it is not reliable.
    """

    def __init__(self, filter_name: str, partial_result: Any = None):
        self.filter_name = filter_name
        self.partial_result = partial_result
        super().__init__(f"Filter {filter_name} failed")

    def __str__(self) -> str:
        message = super().__str__()
        if self.__cause__ is not None:
            message = f"{message}: {type(self.__cause__).__name__}: {self.__cause__}"
        return message


class MalformedInputError(PipelineError):
    """The input could not be turned into a document."""
