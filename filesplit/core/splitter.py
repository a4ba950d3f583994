import os

from filesplit.common import COPY_BUFFER_SIZE, log
from filesplit.core.checksum import file_checksum
from filesplit.core.errors import TransferError, ValidationError
from filesplit.core.naming import build_fragment_name
from filesplit.core.results import SplitResult

CHECKSUM_UNAVAILABLE = "Exception occurred during processing no checksum available"


def split(source_path, chunk_size_bytes, target_directory, checksum_fn=file_checksum, create_target=True):
    """
    Splits a file into fragment files of at most ``chunk_size_bytes`` each.

    Args:
        source_path (str): Path to the file to split.
        chunk_size_bytes (int): Size of each fragment in bytes; the last
            fragment holds the remainder.
        target_directory (str): Directory the fragments are written to.
        checksum_fn (callable): Maps a file path to its hex checksum.
        create_target (bool): Create ``target_directory`` if it is missing.

    Returns:
        SplitResult: Fragment paths in ordinal order and the source checksum.

    Raises:
        ValidationError: If an argument is invalid. Nothing is written.
    """
    _validate_chunk_size(chunk_size_bytes)
    _validate_buffer_size(COPY_BUFFER_SIZE)
    _validate_source(source_path)
    _prepare_target(target_directory, create_target)

    file_name = os.path.basename(source_path)
    result = SplitResult()
    written = []

    try:
        checksum = checksum_fn(source_path)
        source_size = os.path.getsize(source_path)
        full_chunks, remainder = divmod(source_size, chunk_size_bytes)
        total = full_chunks + (1 if remainder else 0)

        log(
            f"Splitting {source_path} ({source_size} bytes) into {total} fragment(s) of {chunk_size_bytes} bytes",
            context="SPLITTER",
        )

        with open(source_path, "rb") as source:
            for ordinal in range(1, total + 1):
                offset = (ordinal - 1) * chunk_size_bytes
                length = chunk_size_bytes if ordinal <= full_chunks else remainder
                fragment_path = os.path.join(
                    target_directory, build_fragment_name(file_name, checksum, ordinal, total)
                )
                # registered before opening so a partial fragment is cleaned up too
                written.append(fragment_path)
                _write_fragment(source, fragment_path, offset, length)

    except OSError as e:
        _cleanup(written)
        log(f"Split of {source_path} failed: {e}", context="SPLITTER")
        error = e if isinstance(e, TransferError) else TransferError(
            f"Error during writing file chunks of {source_path}: {e}", cause=e
        )
        result.checksum = CHECKSUM_UNAVAILABLE
        result.fail(error)
        return result

    result.fragments = written
    result.checksum = checksum
    log(f"Split {source_path} into {len(written)} fragment(s), checksum {checksum}", context="SPLITTER")
    return result


def _write_fragment(source, fragment_path, offset, length):
    """Copy exactly ``length`` bytes at ``offset`` of ``source`` into a new file."""
    source.seek(offset)
    remaining = length
    piece_size = max(1, COPY_BUFFER_SIZE)
    try:
        with open(fragment_path, "wb") as fragment:
            while remaining > 0:
                piece = source.read(min(piece_size, remaining))
                if not piece:
                    raise TransferError(
                        f"Source ended early while writing {fragment_path}: "
                        f"{length - remaining} of {length} bytes copied"
                    )
                fragment.write(piece)
                remaining -= len(piece)
    except TransferError:
        raise
    except OSError as e:
        raise TransferError(f"Problem during writing file: {fragment_path}: {e}", cause=e) from e


def _cleanup(fragment_paths):
    for path in fragment_paths:
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as e:
            log(f"Could not remove fragment {path}: {e}", context="SPLITTER")


def _validate_chunk_size(chunk_size_bytes):
    if isinstance(chunk_size_bytes, bool) or not isinstance(chunk_size_bytes, int):
        raise ValidationError(f"Chunk size must be an integer, got {chunk_size_bytes!r}")
    if chunk_size_bytes <= 0:
        raise ValidationError("Chunk size is not allowed to be smaller than 1")


def _validate_buffer_size(buffer_size):
    if isinstance(buffer_size, bool) or not isinstance(buffer_size, int) or buffer_size <= 0:
        raise ValidationError(f"Copy buffer size must be a positive integer, got {buffer_size!r}")


def _validate_source(source_path):
    if not os.path.exists(source_path):
        raise ValidationError(f"No valid file to split: {source_path} does not exist")
    if not os.path.isfile(source_path):
        raise ValidationError(f"No valid file to split: {source_path} is not a regular file")
    if not os.access(source_path, os.R_OK):
        raise ValidationError(f"No valid file to split: {source_path} is not readable")


def _prepare_target(target_directory, create_target):
    if create_target:
        try:
            os.makedirs(target_directory, exist_ok=True)
        except OSError as e:
            raise ValidationError(f"Could not create target directory {target_directory}: {e}") from e
    if not os.path.isdir(target_directory):
        raise ValidationError(f"No valid target directory: {target_directory}")
