import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from courselint.core.errors import RuleSelectionError
from courselint.lint.issues import LintIssue, Severity

if TYPE_CHECKING:
    from courselint.core.corpus import Corpus
    from courselint.infrastructure.config import ContentConfig

logger = logging.getLogger(__name__)

_RULES: dict[str, type["Rule"]] = {}


class Rule(ABC):
    """A single named check over the content model."""

    code: ClassVar[str]
    name: ClassVar[str]
    default_severity: ClassVar[Severity]
    description: ClassVar[str]

    @abstractmethod
    def check(self, corpus: "Corpus", config: "ContentConfig") -> Iterator[LintIssue]: ...

    def issue(
        self,
        path: Path,
        message: str,
        guidance: str = "",
        line: int | None = None,
        severity: Severity | None = None,
        **details,
    ) -> LintIssue:
        return LintIssue(
            rule=self.code,
            category=self.name,
            severity=severity or self.default_severity,
            file_path=str(path),
            message=message,
            actionable_guidance=guidance,
            line=line,
            details=details,
        )


def register(cls: type[Rule]) -> type[Rule]:
    if cls.code in _RULES:
        raise ValueError(f"Duplicate rule code: {cls.code}")
    _RULES[cls.code] = cls
    return cls


def all_rules() -> list[type[Rule]]:
    # Importing the package registers the built-in rules
    import courselint.lint.rules  # noqa: F401

    return [_RULES[code] for code in sorted(_RULES)]


def resolve_rule(identifier: str) -> type[Rule]:
    """Find a rule by code (case-insensitive) or name."""
    key = identifier.strip()
    for rule in all_rules():
        if rule.code.lower() == key.lower() or rule.name == key.lower():
            return rule
    raise RuleSelectionError(f"Unknown rule: {identifier!r}")


def select_rules(select: Iterable[str] = (), ignore: Iterable[str] = ()) -> list[type[Rule]]:
    """Apply select/ignore lists; an empty selection means every rule."""
    select = list(select)
    selected = [resolve_rule(identifier) for identifier in select] if select else all_rules()
    ignored = {resolve_rule(identifier).code for identifier in ignore}
    rules = sorted({rule for rule in selected if rule.code not in ignored}, key=lambda r: r.code)
    logger.debug(f"Selected rules: {[rule.code for rule in rules]}")
    return rules
