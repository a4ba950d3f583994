"""Exception classes for split and merge operations."""


class FileSplitError(Exception):
    """
    Base exception class for all split/merge errors.
    """
    pass


class ValidationError(FileSplitError, ValueError):
    """
    Raised when an argument is rejected before any file is touched:
    a non-positive chunk size or a missing/invalid source, target,
    destination or fragment directory.
    """
    pass


class TransferError(FileSplitError, OSError):
    """
    Raised when reading or writing file contents fails mid-operation.

    The underlying OSError, if any, is kept on ``cause``.
    """

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause

    def __str__(self):
        return self.args[0] if self.args else ""


class IntegrityError(FileSplitError):
    """
    Raised when the merged file's checksum does not match the expected one.
    """

    def __init__(self, expected, actual, path=None):
        self.expected = expected
        self.actual = actual
        self.path = path
        super().__init__(
            f"Checksum of the merged file is not correct: expected {expected}, got {actual}"
        )
