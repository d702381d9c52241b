from enum import Enum


class MatchMode(str, Enum):
    """How a stored trigger is compared against incoming message text."""

    EXACT = "exact"
    """Message text equals the trigger character for character."""

    INCLUDES = "includes"
    """Message text contains the trigger as a substring."""

    REGEX = "regex"
    """Trigger is a case-insensitive regular expression searched anywhere in the text."""
