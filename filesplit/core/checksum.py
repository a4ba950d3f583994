"""SHA-256 checksum helpers for files and byte strings."""

import hashlib

from filesplit.common import COPY_BUFFER_SIZE
from filesplit.core.errors import ValidationError


def compute_checksum(data: bytes) -> str:
    """
    Compute SHA-256 checksum for given data.

    Args:
        data: Bytes to compute checksum for

    Returns:
        Lowercase hexadecimal SHA-256 digest
    """
    return hashlib.sha256(data).hexdigest()


def file_checksum(file_path, piece_size: int = COPY_BUFFER_SIZE) -> str:
    """
    Compute SHA-256 checksum of a file's full contents, reading it in pieces.

    Args:
        file_path: Path of the file to hash
        piece_size: Bytes read per iteration

    Returns:
        Lowercase hexadecimal SHA-256 digest

    Raises:
        ValidationError: If piece_size is not a positive integer
        OSError: If the file cannot be opened or read
    """
    if piece_size <= 0:
        raise ValidationError(f"Piece size must be greater than zero, got {piece_size}")
    hasher = hashlib.sha256()
    with open(file_path, "rb") as f:
        for piece in iter(lambda: f.read(piece_size), b""):
            hasher.update(piece)
    return hasher.hexdigest()
