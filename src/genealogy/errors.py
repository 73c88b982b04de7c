"""Exceptions raised by the genealogy pipeline.

Validation errors do not derive from ``ValueError``: pydantic validators
re-raise them unchanged instead of wrapping them in a ``ValidationError``.
"""


class GenealogyError(Exception):
    """Base class for all errors raised by this package."""


class InvalidScore(GenealogyError):
    """A relation score lies outside of [0; 100]."""


class InvalidArgument(GenealogyError):
    """An argument or configuration value was rejected."""


class EmptyAggregation(GenealogyError):
    """Zero typed relations were handed to the aggregation."""


class PostParseError(GenealogyError):
    """A post file could not be turned into a post."""


class NoGenealogistsError(GenealogyError):
    """No genealogist could be procured for the run."""


class ConfigError(GenealogyError):
    """The run configuration is incomplete or points to unusable paths."""


class GenealogyTimeout(GenealogyError):
    """Scoring the post collection took longer than the configured deadline."""
