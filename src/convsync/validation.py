"""Value checks shared by the synchronizer and the task pool."""

from __future__ import annotations

from typing import Any

from convsync.constants import AUTO_UPDATE_CHECK_KEY, MAX_CONCURRENCY_KEY
from convsync.errors import InvalidSettingValueError


def is_positive_int(value: Any) -> bool:
    """Return True for an ``int`` greater than zero.

    ``bool`` is a subclass of ``int`` but is never accepted as a limit.
    """
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_max_concurrency(value: Any) -> int:
    """Check a concurrency limit before it is applied anywhere.

    Args:
        value: Candidate limit

    Returns:
        The value unchanged

    Raises:
        InvalidSettingValueError: If the value is not a positive integer
    """
    if not is_positive_int(value):
        raise InvalidSettingValueError(
            MAX_CONCURRENCY_KEY, value, "max concurrency must be a positive integer"
        )
    return value


def validate_flag(value: Any, key: str = AUTO_UPDATE_CHECK_KEY) -> bool:
    if not isinstance(value, bool):
        raise InvalidSettingValueError(key, value, "expected true or false")
    return value
