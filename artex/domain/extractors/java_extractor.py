import re

from artex.domain.extractors.classification import KindRule
from artex.domain.extractors.code_extractor import CodeExtractor

_FENCE = re.compile(r"```[ \t]*java(?![\w+#-])", re.IGNORECASE)
_PACKAGE_DECL = re.compile(r"^[ \t]*package[ \t]+[\w.]+[ \t]*;", re.MULTILINE)

_VALID_MARKERS = re.compile(
    r"\bpackage\s+[\w.]+\s*;"
    r"|\bimport\s+(?:static\s+)?[\w.*]+\s*;"
    r"|\b(?:class|interface|enum|record)\s+[A-Za-z_$][\w$]*"
    r"|@interface\s+[A-Za-z_$][\w$]*"
)

_CAN_HANDLE_MARKERS = (
    "// src/main/java/",
    "public class ",
    "@SpringBootApplication",
    "@RestController",
)


class JavaExtractor(CodeExtractor):
    """Backend source extractor for Java files."""

    KIND_ID = "Java"
    DESCRIPTION = "Java backend source (classes, interfaces, enums, Spring components)"
    FENCE_TAGS = ("java",)
    SUFFIXES = (".java",)
    SOURCE_ROOTS = ("src/main/java/", "src/test/java/", "src/")
    DEFAULT_KIND = "Class"
    INVALID_CONTENT_ERROR = (
        "Invalid Java content - missing package declaration, import or type definition"
    )

    KIND_RULES = (
        KindRule("Controller", any_of=("@RestController", "@Controller")),
        KindRule("Service", all_of=("@Service",)),
        KindRule("Repository", all_of=("@Repository",)),
        KindRule("Entity", all_of=("@Entity",)),
        KindRule("Configuration", all_of=("@Configuration",)),
        KindRule("Filter", all_of=("@Component", "Filter")),
        KindRule("Interface", all_of=("interface ",)),
        KindRule("Enum", all_of=("enum ",)),
    )

    def can_handle(self, text: str) -> bool:
        return (
            bool(_FENCE.search(text))
            or any(marker in text for marker in _CAN_HANDLE_MARKERS)
            or self.declares_path(text)
            or bool(_PACKAGE_DECL.search(text))
        )

    def is_valid_content(self, content: str) -> bool:
        return bool(_VALID_MARKERS.search(content))
