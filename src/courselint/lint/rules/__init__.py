"""Built-in lint rules.

Importing this package registers every rule with `courselint.lint.rule`.
"""

from courselint.lint.rules import counts, front_matter, lesson_body, links, structure

__all__ = ["counts", "front_matter", "lesson_body", "links", "structure"]
