"""Exception types raised by marksight.

Nodes that match no rule and nodes missing an expected child or field are
not errors; only broken preconditions and bad input surface here.
"""


class MarksightError(Exception):
    """Base class for marksight errors."""


class TreesNotReadyError(MarksightError):
    """Raised when a block or inline tree is missing."""


class GrammarUnavailableError(MarksightError):
    """Raised when the parser could not load one of its grammars."""


class UnknownFeatureError(MarksightError, ValueError):
    """Raised for a feature name that no rule table declares."""


class TreeFormatError(MarksightError, ValueError):
    """Raised when a serialized tree snapshot is malformed."""


class ConfigError(MarksightError, ValueError):
    """Raised when marksight.toml holds a value of the wrong shape."""
