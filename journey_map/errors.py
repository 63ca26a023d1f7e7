from typing import List

from pydantic import ValidationError


class JourneyMapError(Exception):
    """Base class for errors raised by journey_map."""


class JourneyValidationError(JourneyMapError):
    """Input data does not match the Journey schema.

    The whole batch is rejected; ``messages`` holds one line per failing
    field so the page can show what went wrong.
    """

    def __init__(self, error: ValidationError):
        self.error_count = error.error_count()
        self.messages: List[str] = [
            f"{'.'.join(str(p) for p in e['loc']) or '<root>'}: {e['msg']}"
            for e in error.errors()
        ]
        super().__init__(
            f"{self.error_count} validation error(s) in journey data: "
            + "; ".join(self.messages[:5])
        )


class SurfaceStateError(JourneyMapError):
    """Raised when attaching to a map surface that is not ready."""
