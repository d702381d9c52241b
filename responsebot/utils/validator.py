import logging

logger = logging.getLogger(__name__)

DISCORD_MESSAGE_LIMIT = 2000


class MessageValidator:
    """Validator for outgoing messages."""

    def __init__(self, max_length: int = DISCORD_MESSAGE_LIMIT):
        self.max_length = max_length

    def validate_message(self, message: str) -> list[str]:
        """Splits a message into chunks the platform will accept."""
        if len(message) <= self.max_length:
            return [message]
        logger.info(
            f"Message exceeds the maximum allowed length ({self.max_length}). Splitting message."
        )
        return [
            message[i : i + self.max_length]
            for i in range(0, len(message), self.max_length)
        ]

    @staticmethod
    def truncate(text: str, limit: int) -> str:
        """Cuts text to at most `limit` characters, ending in '...' when cut."""
        if len(text) <= limit:
            return text
        return text[: limit - 3] + "..."
