from .exceptions import (
    ConfigurationError,
    FilterExecutionError,
    MalformedInputError,
    PipelineError,
)
from .filters import (
    DEFAULT_FILTERS,
    EmojiFilter,
    EmojiVocabulary,
    Filter,
    FunctionFilter,
    MentionFilter,
    TableOfContentsFilter,
)
from .instrumentation import NullInstrumentation, SignalInstrumentation
from .pipeline import Pipeline

__all__ = [
    "ConfigurationError",
    "DEFAULT_FILTERS",
    "EmojiFilter",
    "EmojiVocabulary",
    "Filter",
    "FilterExecutionError",
    "FunctionFilter",
    "MalformedInputError",
    "MentionFilter",
    "NullInstrumentation",
    "Pipeline",
    "PipelineError",
    "SignalInstrumentation",
    "TableOfContentsFilter",
]
