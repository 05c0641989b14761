"""
Path normalization utilities for extracted artifacts.

Provides:
- Canonical relative form for declared paths
- Source-root marker stripping (e.g. "src/main/java/")
- Path traversal rejection

Extractors run every declared path through here before validating content.
"""

import re
from collections.abc import Iterable


class PathValidationError(Exception):
    """Raised when a declared artifact path cannot be accepted."""
    pass


class PathValidator:
    """Normalizes and validates declared artifact paths."""

    # Quotes and backticks AI output sometimes wraps around paths
    _WRAPPING_CHARS = "\"'`"

    _LEADING_RELATIVE = re.compile(r'^(?:\./|/)+')

    @classmethod
    def to_forward_slashes(cls, path: str) -> str:
        """
        Convert Windows separators to forward slashes.

        Examples:
            >>> PathValidator.to_forward_slashes("src\\\\app\\\\App.tsx")
            'src/app/App.tsx'
        """
        return path.replace("\\", "/")

    @classmethod
    def strip_to_source_root(cls, path: str, source_roots: Iterable[str]) -> str:
        """
        Drop everything before the first recognized source-root marker.

        Markers are tried in order; a marker only matches at a path segment
        boundary, so "mysrc/app.css" is left alone for marker "src/".

        Args:
            path: Forward-slash path
            source_roots: Ordered markers such as ("src/main/java/", "src/")

        Returns:
            Path starting at the marker, or the path unchanged if none match

        Examples:
            >>> PathValidator.strip_to_source_root(
            ...     "backend/api/src/main/java/com/x/A.java", ["src/main/java/"]
            ... )
            'src/main/java/com/x/A.java'
        """
        for marker in source_roots:
            start = 0
            while True:
                idx = path.find(marker, start)
                if idx < 0:
                    break
                if idx == 0 or path[idx - 1] == "/":
                    return path[idx:]
                start = idx + 1
        return path

    @classmethod
    def validate_relative(cls, path: str) -> str:
        """
        Reject paths that would escape the caller's root directory.

        Raises:
            PathValidationError: If any segment is '..'
        """
        if any(segment == ".." for segment in path.split("/")):
            raise PathValidationError(f"Path escapes project root: '{path}'")
        return path

    @classmethod
    def normalize_artifact_path(cls, raw_path: str, source_roots: Iterable[str] = ()) -> str:
        """
        Normalize a declared path to the canonical relative form.

        Steps:
        1. Trim whitespace and wrapping quotes/backticks
        2. Convert backslashes to forward slashes
        3. Strip any prefix before a recognized source-root marker
        4. Drop leading './' and '/' so the result is relative
        5. Reject '..' segments

        Args:
            raw_path: Path exactly as declared in the response
            source_roots: Ordered source-root markers for the target ecosystem

        Returns:
            Normalized relative path (may be empty if nothing was declared)

        Raises:
            PathValidationError: If the path escapes the root

        Examples:
            >>> PathValidator.normalize_artifact_path("./src/index.css", ["src/"])
            'src/index.css'
            >>> PathValidator.normalize_artifact_path("../secrets.css", ["src/"])
            Traceback (most recent call last):
                ...
            artex.domain.validation.path_validator.PathValidationError: Path escapes project root: '../secrets.css'
        """
        path = raw_path.strip().strip(cls._WRAPPING_CHARS).strip()
        path = cls.to_forward_slashes(path)
        path = cls.strip_to_source_root(path, source_roots)
        path = cls._LEADING_RELATIVE.sub("", path)
        return cls.validate_relative(path)


def normalize_artifact_path(raw_path: str, source_roots: Iterable[str] = ()) -> str:
    """Normalize a declared artifact path - convenience wrapper."""
    return PathValidator.normalize_artifact_path(raw_path, source_roots)
