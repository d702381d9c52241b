import re

from responsebot.services.responses.errors import InvalidPatternError
from responsebot.services.responses.models.match_mode import MatchMode


def trigger_matches(trigger: str, content: str, mode: MatchMode) -> bool:
    """Checks a single trigger against message content.

    Raises:
        InvalidPatternError: mode is regex and the trigger does not compile.
    """
    if mode == MatchMode.EXACT:
        return content == trigger

    if mode == MatchMode.INCLUDES:
        return trigger in content

    if mode == MatchMode.REGEX:
        try:
            pattern = re.compile(trigger, re.IGNORECASE)
        except re.error as e:
            raise InvalidPatternError(trigger, str(e)) from e
        return pattern.search(content) is not None

    raise ValueError(f"Unknown match mode: {mode}")
