"""Exception hierarchy for the eventwindow recurrence engine.

These types are raised inside the engine and by the configuration layer.
The recurrence engine boundary converts every engine error into a ``False``
visibility result, so callers of ``is_recurrence_in_range`` and
``EventFilter`` never see them.
"""


class EventWindowError(Exception):
    """Base exception for all eventwindow errors."""


class RRuleParseError(EventWindowError):
    """Repetition rule text is empty or does not conform to the RRULE grammar.

    Raised when:
    - The rule text is empty or whitespace only
    - The rule evaluation library rejects the rule (unknown FREQ, bad BYDAY,
      malformed UNTIL, ...)
    """


class DegenerateIntervalError(EventWindowError):
    """An event interval or query window ends before it starts."""


class RecurrenceEvaluationError(EventWindowError):
    """Unexpected failure while generating or classifying occurrences."""


class ConfigError(EventWindowError):
    """Configuration file could not be read or is not a mapping."""
