"""Kind classification tables.

Each extractor owns an ordered tuple of ``KindRule`` entries. Rules are
evaluated top to bottom; the first match supplies the label, otherwise the
extractor's default label is used. Keeping the policy as data lets each table
be tested on its own.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class KindRule:
    """One row of a classification table.

    Attributes:
        label: Kind label produced when the rule matches.
        all_of: Substrings that must all be present.
        any_of: Substrings of which at least one must be present (ignored if empty).
        suffixes: Restrict the rule to artifacts whose path ends with one of these.
        count_of: Substring to count; when it occurs more than once the
            ``plural`` template is used instead of ``label``.
        plural: Template with a ``{count}`` placeholder.
    """

    label: str
    all_of: tuple[str, ...] = ()
    any_of: tuple[str, ...] = ()
    suffixes: tuple[str, ...] = ()
    count_of: str | None = None
    plural: str | None = None

    def matches(self, content: str, path: str = "") -> bool:
        if self.suffixes and not path.endswith(self.suffixes):
            return False
        if any(marker not in content for marker in self.all_of):
            return False
        return not self.any_of or any(marker in content for marker in self.any_of)

    def render(self, content: str) -> str:
        if self.count_of and self.plural:
            count = content.count(self.count_of)
            if count > 1:
                return self.plural.format(count=count)
        return self.label


def classify(rules: tuple[KindRule, ...], content: str, path: str, default: str) -> str:
    """Return the label of the first matching rule, or ``default``."""
    for rule in rules:
        if rule.matches(content, path):
            return rule.render(content)
    return default
