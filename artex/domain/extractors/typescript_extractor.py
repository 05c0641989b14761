import re

from artex.domain.extractors.classification import KindRule
from artex.domain.extractors.code_extractor import CodeExtractor
from artex.domain.extractors.react_extractor import has_component_markers

_FENCE = re.compile(r"```[ \t]*(?:ts|typescript)(?![\w+#-])", re.IGNORECASE)
_DECLARATIONS = re.compile(
    r"\bexport\s+(?:declare\s+)?(?:interface|enum|type)\b"
    r"|\bdeclare\s+(?:module|namespace|global|const|function|class|type|interface)\b"
    r"|\bnamespace\s+[A-Za-z_$][\w$.]*\s*\{"
)
_VALID_KEYWORDS = re.compile(
    r"\b(?:export|import|interface|type|enum|declare|namespace)\b"
)


class TypeScriptExtractor(CodeExtractor):
    """Typed-script extractor for plain TypeScript modules and declaration files.

    Disjoint from the React extractor: bare syntax next to component markers
    is not claimed, and no segment carrying them is accepted as valid.
    """

    KIND_ID = "TypeScript"
    DESCRIPTION = "TypeScript modules and declarations (.ts, .d.ts)"
    FENCE_TAGS = ("ts", "typescript")
    SUFFIXES = (".ts", ".d.ts")
    DEFAULT_KIND = "TypeScript"
    INVALID_CONTENT_ERROR = "Invalid TypeScript content - missing valid TS syntax"

    KIND_RULES = (
        KindRule("TypeScript Definitions", all_of=("interface ", "enum ", "type ")),
        KindRule(
            "TypeScript Interface",
            all_of=("export interface",),
            count_of="export interface",
            plural="TypeScript Interfaces ({count} interfaces)",
        ),
        KindRule(
            "TypeScript Enum",
            all_of=("export enum",),
            count_of="export enum",
            plural="TypeScript Enums ({count} enums)",
        ),
        KindRule("TypeScript Types", all_of=("export type",)),
        KindRule("TypeScript Constants", all_of=("export const",)),
        KindRule("TypeScript Functions", all_of=("function ",)),
        KindRule("TypeScript Class", all_of=("class ",)),
        KindRule("TypeScript Declarations", all_of=("declare ",)),
        KindRule("TypeScript Namespace", all_of=("namespace ",)),
    )

    def can_handle(self, text: str) -> bool:
        if _FENCE.search(text) or self.declares_path(text):
            return True
        # Bare declaration syntax alongside component markers belongs to React.
        return bool(_DECLARATIONS.search(text)) and not has_component_markers(text)

    def is_valid_content(self, content: str) -> bool:
        if has_component_markers(content):
            return False
        return bool(_VALID_KEYWORDS.search(content))
