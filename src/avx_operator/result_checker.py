"""Classification of completed controller calls.

A checker receives ``(action, method, reason, return_flag)`` and returns the
exception to raise, or ``None`` for success. Matching is done on the reason
text only: the controller does not report absence through HTTP status codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .errors import APIRejected, NotFoundError

ResultChecker = Callable[[str, str, str, bool], Optional[Exception]]

DOES_NOT_EXIST = "does not exist"


class Classification(Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    GENERIC = "generic"


def basic_check(action: str, method: str, reason: str, return_flag: bool) -> Exception | None:
    if return_flag:
        return None
    return APIRejected(action, method, reason)


@dataclass(frozen=True)
class NotFoundChecker:
    """Checker that maps known absence phrases to :class:`NotFoundError`."""

    phrases: tuple[str, ...] = (DOES_NOT_EXIST,)

    def __call__(self, action: str, method: str, reason: str, return_flag: bool) -> Exception | None:
        if return_flag:
            return None
        if any(phrase in reason for phrase in self.phrases):
            return NotFoundError(f"{action}: {reason}", action=action, reason=reason)
        return APIRejected(action, method, reason)


def classify(error: Exception | None) -> Classification:
    if error is None:
        return Classification.SUCCESS
    if isinstance(error, NotFoundError):
        return Classification.NOT_FOUND
    return Classification.GENERIC
