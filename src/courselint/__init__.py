"""
courselint: a linter for Markdown course content.

courselint loads a tree of courses, sections and lessons into a content
model and checks it against the authoring conventions of the tree.

## Modules:

- `courselint.core`: The content model (corpus, courses, sections, lessons).
- `courselint.lint`: The lint rules and the linter that runs them.
- `courselint.infrastructure`: Configuration, logging paths and file discovery.
- `courselint.cli`: The command line interface.
"""

__version__ = "0.1.0"
