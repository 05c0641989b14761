import re

from artex.domain.extractors.classification import KindRule
from artex.domain.extractors.code_extractor import CodeExtractor

# Markers that identify component-framework source. Shared with the
# TypeScript extractor, which must never claim text carrying them.
_COMPONENT_MARKERS = re.compile(
    r"\bimport\s+React\b"
    r"|\bfrom\s+['\"]react['\"]"
    r"|\buse(?:State|Effect|Context|Reducer|Memo|Callback|Ref|LayoutEffect)\s*\("
    r"|\bJSX\.Element\b"
    r"|\bReact\.(?:FC|Component|PureComponent)\b"
)

_HOOK_CALL = re.compile(r"\buse[A-Z]\w*\s*\(")
_MARKUP = re.compile(r"<[A-Za-z][\w.]*(?:\s[^<>]*)?/?>|</[A-Za-z][\w.]*\s*>|<>|</>")
_SELF_CLOSING = re.compile(r"<[A-Za-z][\w.]*(?:\s[^<>]*)?/>")
_EXPORT_OR_RETURN = re.compile(r"\b(?:export|return)\b")

_FENCE = re.compile(r"```[ \t]*(?:tsx|jsx)(?![\w+#-])", re.IGNORECASE)


def has_component_markers(text: str) -> bool:
    """True when ``text`` carries React imports, hook calls or React types."""
    return bool(_COMPONENT_MARKERS.search(text))


class ReactExtractor(CodeExtractor):
    """Component source extractor for React TSX/JSX files."""

    KIND_ID = "React/TypeScript"
    DESCRIPTION = "React component source (TSX/JSX)"
    FENCE_TAGS = ("tsx", "jsx")
    SUFFIXES = (".tsx", ".jsx")
    DEFAULT_KIND = "React Component"
    INVALID_CONTENT_ERROR = (
        "Invalid React content - no React import, hook call or JSX markup with export/return"
    )

    KIND_RULES = (
        KindRule("React Component", all_of=("export default", "function")),
        KindRule("React Context", all_of=("createContext",)),
        KindRule("React Hook", any_of=("useState", "useEffect")),
        KindRule("API Service", any_of=("fetch(", "axios", "api")),
        KindRule("React TSX Component", suffixes=(".tsx",)),
        KindRule("React JSX Component", suffixes=(".jsx",)),
    )

    def can_handle(self, text: str) -> bool:
        if _FENCE.search(text) or self.declares_path(text):
            return True
        if has_component_markers(text):
            return True
        has_self_closing = bool(_SELF_CLOSING.search(text))
        if "export default" in text and ("function" in text or "const" in text) and has_self_closing:
            return True
        return "return (" in text and has_self_closing

    def is_valid_content(self, content: str) -> bool:
        if has_component_markers(content) or _HOOK_CALL.search(content):
            return True
        return bool(_MARKUP.search(content) and _EXPORT_OR_RETURN.search(content))
