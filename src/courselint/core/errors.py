class CourseLintError(Exception):
    """Base class for errors that stop courselint from doing its job.

    Authoring mistakes in the content are not errors in this sense; they are
    reported as lint issues.
    """


class ContentRootError(CourseLintError):
    """The content root is missing or contains no courses."""


class RuleSelectionError(CourseLintError):
    """A rule code or name in the selection is unknown."""


class ConfigError(CourseLintError):
    """The configuration is inconsistent."""
