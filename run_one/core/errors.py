from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RunOneError(Exception):
    code: str
    message: str
    data: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ArgumentError(RunOneError):
    pass


class ValidationError(RunOneError):
    pass


class InvalidWaitValue(RunOneError):
    """
    Reported (never raised) when RUN_ONE_WAIT cannot be used as a delay.
    """


class ChildWaitError(RunOneError):
    pass
