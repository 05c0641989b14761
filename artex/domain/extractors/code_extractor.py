import functools
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar

from artex.domain.errors import ExtractorError
from artex.domain.extractors.classification import KindRule, classify
from artex.domain.models.artifact import Artifact
from artex.domain.validation.path_validator import PathValidationError, normalize_artifact_path

logger = logging.getLogger(__name__)

# Comment styles accepted in front of a declared path: //, /* */, <!-- -->, #
_COMMENT_OPEN = r"(?://+|/\*+|<!--|\#+)"
_COMMENT_CLOSE = r"(?:\*+/|-->)?"

_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\r?\n)+")
_FENCE_LINE = re.compile(r"^[ \t]*```[^\r\n]*$")


@functools.lru_cache(maxsize=None)
def _compile(pattern: str, flags: int = 0) -> re.Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise ExtractorError(f"Invalid extraction pattern: {e}") from e


def _alternation(options: tuple[str, ...]) -> str:
    # Longest first so "d.ts" wins over "ts" and "typescript" over "ts".
    return "|".join(re.escape(o) for o in sorted(options, key=len, reverse=True))


def trim_blank_lines(text: str) -> str:
    """Drop leading and trailing blank lines, keeping first-line indentation."""
    return _LEADING_BLANK_LINES.sub("", text).rstrip()


def strip_fence_residue(text: str) -> str:
    """Remove fence marker lines left at the edges of a raw segment."""
    lines = trim_blank_lines(text).splitlines()
    while lines and _FENCE_LINE.match(lines[0]):
        lines.pop(0)
    while lines and _FENCE_LINE.match(lines[-1]):
        lines.pop()
    return trim_blank_lines("\n".join(lines))


class CodeExtractor(ABC):
    """Abstract interface for per-kind artifact extractors (Strategy pattern).

    Subclasses declare their fence tags, suffixes, source roots and
    classification table, and implement ``can_handle`` and
    ``is_valid_content``. The tiered extraction itself lives here:

    1. Fenced blocks whose first content line declares a path.
    2. Raw text split on path comments (a lone comment counts only when
       prose precedes it).
    3. Whole text starting with exactly one path comment.

    Extractors hold no mutable state; one instance may serve any number of
    concurrent calls.
    """

    KIND_ID: ClassVar[str]
    DESCRIPTION: ClassVar[str] = "No description available"
    FENCE_TAGS: ClassVar[tuple[str, ...]]
    SUFFIXES: ClassVar[tuple[str, ...]]
    SOURCE_ROOTS: ClassVar[tuple[str, ...]] = ("src/",)
    KIND_RULES: ClassVar[tuple[KindRule, ...]] = ()
    DEFAULT_KIND: ClassVar[str]
    INVALID_CONTENT_ERROR: ClassVar[str] = "Invalid content"

    @classmethod
    def get_metadata(cls) -> dict[str, Any]:
        """Return extractor metadata for discovery commands.

        Returns:
            dict with keys: name, description, suffixes, fence_tags
        """
        return {
            "name": cls.KIND_ID,
            "description": cls.DESCRIPTION,
            "suffixes": sorted(cls.SUFFIXES),
            "fence_tags": list(cls.FENCE_TAGS),
        }

    def kind_id(self) -> str:
        return self.KIND_ID

    def supported_suffixes(self) -> frozenset[str]:
        return frozenset(self.SUFFIXES)

    @abstractmethod
    def can_handle(self, text: str) -> bool:
        """Cheap marker scan deciding whether extraction should be attempted.

        Called for every extractor on every input, so it must not do real
        parsing and must not have side effects.
        """
        ...

    @abstractmethod
    def is_valid_content(self, content: str) -> bool:
        """Shallow structural check on one extracted segment."""
        ...

    def classify(self, content: str, path: str) -> str:
        return classify(self.KIND_RULES, content, path, self.DEFAULT_KIND)

    def extract(self, text: str) -> list[Artifact]:
        """Extract artifacts using the first tier that yields anything.

        Malformed segments come back as invalid artifacts. Only internal
        faults (e.g. a broken pattern) raise.

        Raises:
            ExtractorError: If an extraction pattern cannot be compiled
        """
        for tier in self._tiers():
            artifacts = tier(text)
            if artifacts:
                logger.debug(
                    f"{self.KIND_ID} extractor: {tier.__name__} found {len(artifacts)} artifacts"
                )
                return artifacts
        return []

    def _tiers(self) -> list[Callable[[str], list[Artifact]]]:
        return [
            self._extract_fenced_blocks,
            self._extract_raw_segments,
            self._extract_single_document,
        ]

    # -- patterns ---------------------------------------------------------

    def _path_comment_core(self) -> str:
        exts = _alternation(tuple(s.lstrip(".") for s in self.SUFFIXES))
        return (
            rf"{_COMMENT_OPEN}[ \t]*"
            rf"(?P<path>[^\s<>*|]+?\.(?:{exts}))"
            rf"[ \t]*{_COMMENT_CLOSE}[ \t]*\r?$"
        )

    def path_comment_pattern(self) -> re.Pattern[str]:
        """A whole-line path-declaring comment for one of this extractor's suffixes."""
        return _compile(rf"^[ \t]*{self._path_comment_core()}", re.MULTILINE)

    def declares_path(self, text: str) -> bool:
        """True when some line of ``text`` is a path comment for this extractor."""
        return self.path_comment_pattern().search(text) is not None

    def fenced_block_pattern(self) -> re.Pattern[str]:
        """A fenced block tagged for this extractor whose first line declares a path."""
        tags = _alternation(self.FENCE_TAGS)
        return _compile(
            rf"^[ \t]*```[ \t]*(?i:{tags})(?![\w+#-])\s*?"
            rf"{self._path_comment_core()}\n?"
            rf"(?P<body>.*?)^[ \t]*```[ \t]*\r?$",
            re.MULTILINE | re.DOTALL,
        )

    # -- tiers ------------------------------------------------------------

    def _extract_fenced_blocks(self, text: str) -> list[Artifact]:
        return [
            self._build_artifact(match.group("path"), trim_blank_lines(match.group("body")))
            for match in self.fenced_block_pattern().finditer(text)
        ]

    def _extract_raw_segments(self, text: str) -> list[Artifact]:
        matches = list(self.path_comment_pattern().finditer(text))
        if not matches:
            return []
        # A lone comment opening the text is a whole document (tier 3).
        if len(matches) == 1 and not text[:matches[0].start()].strip():
            return []

        artifacts: list[Artifact] = []
        for i, match in enumerate(matches):
            end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
            segment = strip_fence_residue(text[match.end():end])
            artifacts.append(self._build_artifact(match.group("path"), segment))
        return artifacts

    def _extract_single_document(self, text: str) -> list[Artifact]:
        stripped = text.strip()
        pattern = self.path_comment_pattern()
        match = pattern.match(stripped)
        if match is None or len(pattern.findall(stripped)) != 1:
            return []
        body = strip_fence_residue(stripped[match.end():])
        return [self._build_artifact(match.group("path"), body)]

    # -- artifact construction -------------------------------------------

    def _build_artifact(self, raw_path: str, content: str) -> Artifact:
        try:
            path = normalize_artifact_path(raw_path, self.SOURCE_ROOTS)
        except PathValidationError as e:
            return Artifact.invalid(
                path=raw_path.strip(), producer=self.KIND_ID, error=str(e), content=content
            )

        if not content.strip():
            return Artifact.invalid(
                path=path, producer=self.KIND_ID, error=f"Empty content for {path}"
            )

        if not self.is_valid_content(content):
            logger.debug(f"{self.KIND_ID} extractor rejected content for {path}")
            return Artifact.invalid(
                path=path,
                producer=self.KIND_ID,
                error=self.INVALID_CONTENT_ERROR,
                content=content,
            )

        return Artifact(
            path=path,
            content=content,
            kind=self.classify(content, path),
            producer=self.KIND_ID,
        )
