"""Domain-level exceptions for the artifact extraction engine."""


class ExtractorError(Exception):
    """Raised when an extractor hits an internal fault (not malformed input)."""

    pass
