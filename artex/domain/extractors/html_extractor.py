import logging
import re
from collections.abc import Callable

from artex.domain.extractors.classification import KindRule
from artex.domain.extractors.code_extractor import CodeExtractor, trim_blank_lines
from artex.domain.models.artifact import Artifact

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```[ \t]*html(?![\w+#-])", re.IGNORECASE)
_DOCUMENT_MARKERS = re.compile(r"<!doctype|<html|<head|<body", re.IGNORECASE)
_BALANCED_TAG = re.compile(r"<([a-zA-Z][\w-]*)\b[^<>]*>.*?</\1\s*>", re.DOTALL | re.IGNORECASE)
_SELF_CLOSING_TAG = re.compile(r"<[a-zA-Z][\w-]*\b[^<>]*/>")

# ```html blocks that carry a full document but no path comment
_UNTITLED_DOCUMENT = re.compile(
    r"^[ \t]*```[ \t]*html[ \t]*\r?\n(?P<body>[^`]*?<!DOCTYPE html.*?)^[ \t]*```",
    re.MULTILINE | re.DOTALL | re.IGNORECASE,
)
_TITLE = re.compile(r"<title>([^<]+)</title>", re.IGNORECASE)
_NON_SLUG = re.compile(r"[^a-z0-9]+")

DEFAULT_DOCUMENT_DIR = "src/main/resources/static/"


def document_path_for(content: str) -> str:
    """Derive a destination path for an untitled HTML document from its <title>."""
    match = _TITLE.search(content)
    if match:
        slug = _NON_SLUG.sub("-", match.group(1).lower()).strip("-")
        if slug:
            return f"{DEFAULT_DOCUMENT_DIR}{slug}.html"
    return f"{DEFAULT_DOCUMENT_DIR}index.html"


class HtmlExtractor(CodeExtractor):
    """Markup extractor for HTML documents and templates."""

    KIND_ID = "HTML"
    DESCRIPTION = "HTML documents and server-side templates"
    FENCE_TAGS = ("html",)
    SUFFIXES = (".html", ".htm")
    SOURCE_ROOTS = ("src/main/resources/", "public/", "src/")
    DEFAULT_KIND = "HTML"
    INVALID_CONTENT_ERROR = "Invalid HTML content - missing basic HTML structure"

    # Matched against lower-cased content.
    KIND_RULES = (
        KindRule("HTML5 Document", all_of=("<!doctype html",)),
        KindRule("HTML Template", all_of=("<template",)),
        KindRule("Thymeleaf Template", any_of=("th:", "@{")),
        KindRule("JSP Template", any_of=("${", "<%")),
        KindRule("HTML Form", all_of=("<form",)),
        KindRule("HTML Table", all_of=("<table",)),
        KindRule("Styled HTML", any_of=("bootstrap", "tailwind")),
        KindRule("Interactive HTML", all_of=("<script",)),
    )

    def can_handle(self, text: str) -> bool:
        return bool(
            _FENCE.search(text)
            or self.declares_path(text)
            or _DOCUMENT_MARKERS.search(text)
        )

    def is_valid_content(self, content: str) -> bool:
        return bool(
            _DOCUMENT_MARKERS.search(content)
            or _BALANCED_TAG.search(content)
            or _SELF_CLOSING_TAG.search(content)
        )

    def classify(self, content: str, path: str) -> str:
        return super().classify(content.lower(), path)

    def _tiers(self) -> list[Callable[[str], list[Artifact]]]:
        return super()._tiers() + [self._extract_untitled_documents]

    def _extract_untitled_documents(self, text: str) -> list[Artifact]:
        artifacts: list[Artifact] = []
        for match in _UNTITLED_DOCUMENT.finditer(text):
            content = trim_blank_lines(match.group("body"))
            path = document_path_for(content)
            logger.debug(f"HTML document without path comment, using {path}")
            artifacts.append(self._build_artifact(path, content))
        return artifacts
