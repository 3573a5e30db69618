from __future__ import annotations

from typing import Any


class BlindControllerError(Exception):
    pass


class MalformedInputError(BlindControllerError):
    pass


class SchemaViolationError(BlindControllerError):
    def __init__(self, topic: str, errors: dict[str, str]) -> None:
        self.topic = topic
        self.errors = errors
        details = ", ".join(f"{key}: {msg}" for key, msg in sorted(errors.items()))
        super().__init__(f"Invalid {topic} payload ({details})")


class ConfigNotFoundError(BlindControllerError):
    def __init__(self, channel: Any) -> None:
        self.channel = channel
        super().__init__(f"No configuration for channel {channel!r}")
