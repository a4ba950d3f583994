"""Result objects returned by split and merge."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Status(Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class _Result:
    status: Status = Status.SUCCESS
    errors: List[Exception] = field(default_factory=list)
    error_messages: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS

    @property
    def error_kind(self) -> Optional[type]:
        """Class of the first recorded error, or None."""
        return type(self.errors[0]) if self.errors else None

    def fail(self, error: Exception) -> None:
        self.status = Status.FAILURE
        self.errors.append(error)
        self.error_messages.append(str(error))

    def raise_for_status(self) -> None:
        """Re-raise the first recorded error if the operation failed."""
        if self.status is Status.FAILURE and self.errors:
            raise self.errors[0]


@dataclass
class SplitResult(_Result):
    """
    Outcome of one split call.

    ``fragments`` holds fragment paths in ordinal order. On failure it is
    empty and ``checksum`` is CHECKSUM_UNAVAILABLE.
    """
    fragments: List[str] = field(default_factory=list)
    checksum: Optional[str] = None


@dataclass
class MergeResult(_Result):
    """
    Outcome of one merge call.

    ``destination`` is only set when the merged file passed verification.
    """
    destination: Optional[str] = None
    fragments: List[str] = field(default_factory=list)
    actual_checksum: Optional[str] = None
