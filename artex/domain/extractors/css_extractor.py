import re

from artex.domain.extractors.classification import KindRule
from artex.domain.extractors.code_extractor import CodeExtractor

_FENCE = re.compile(r"```[ \t]*(?:css|scss|sass)(?![\w+#-])", re.IGNORECASE)
_AT_RULE = re.compile(r"@(?:tailwind|layer|apply|import|media|keyframes|font-face|use|mixin|include)\b")
_RULE_BLOCK = re.compile(r"\{[^{}]*\}", re.DOTALL)
_DECLARATION = re.compile(r"[a-zA-Z-]+\s*:\s*[^;{}\r\n]+;")
# selector { prop: value; }
# Selectors never contain "(", "=" or "?" nor end in ":". Declarations open the
# body or follow a ";".
_DECLARATION_BLOCK = re.compile(
    r"(?m)^[ \t]*(?!(?:interface|type|class|enum|function|const|let|var|export|public|private|protected|if|else|for|while|switch|return|try|finally)\b)"
    r"[.#:\[*a-zA-Z](?:[^{};()=?\r\n]*[^{};()=?:\s])?\s*\{"
    r"(?![^{}]*\breturn\b)"
    r"\s*(?:[^{};]*;\s*)*[a-zA-Z-]+\s*:\s*[^;{}]+;[^{}]*\}"
)


class CssExtractor(CodeExtractor):
    """Style-sheet extractor for CSS, SCSS and SASS files."""

    KIND_ID = "CSS"
    DESCRIPTION = "Style sheets (CSS, SCSS, SASS, Tailwind)"
    FENCE_TAGS = ("css", "scss", "sass")
    SUFFIXES = (".css", ".scss", ".sass")
    DEFAULT_KIND = "CSS"
    INVALID_CONTENT_ERROR = "Invalid CSS content - no valid CSS rules found"

    KIND_RULES = (
        KindRule("Tailwind CSS", all_of=("@tailwind",)),
        KindRule("CSS Imports", all_of=("@import",)),
        KindRule("Responsive CSS", all_of=("@media",)),
        KindRule("CSS Animations", all_of=("@keyframes",)),
        KindRule("SCSS", suffixes=(".scss",)),
        KindRule("SASS", suffixes=(".sass",)),
        KindRule("SCSS", all_of=("$", "&")),
    )

    def can_handle(self, text: str) -> bool:
        return bool(
            _FENCE.search(text)
            or self.declares_path(text)
            or _AT_RULE.search(text)
            or _DECLARATION_BLOCK.search(text)
        )

    def is_valid_content(self, content: str) -> bool:
        # Any non-empty style sheet is accepted.
        return bool(
            _RULE_BLOCK.search(content)
            or _DECLARATION.search(content)
            or _AT_RULE.search(content)
            or content.strip()
        )
