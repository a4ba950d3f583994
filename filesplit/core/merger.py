import os
import shutil

from filesplit.common import COPY_BUFFER_SIZE, log
from filesplit.core.checksum import file_checksum
from filesplit.core.errors import IntegrityError, TransferError, ValidationError
from filesplit.core.results import MergeResult


def discover_fragments(fragment_directory, exclude=()):
    """
    Lists every regular file below ``fragment_directory``.

    Files are ordered by plain string sort of their absolute paths, which is
    ordinal order for fragments produced by ``split``.

    Args:
        fragment_directory (str): Directory to walk recursively.
        exclude (iterable): Paths to leave out of the listing.

    Returns:
        List[str]: Absolute fragment paths in merge order.
    """
    if not os.path.isdir(fragment_directory):
        raise ValidationError(f"No valid fragment directory: {fragment_directory}")

    skipped = {os.path.abspath(p) for p in exclude}
    found = []

    def _raise(error):
        raise error

    for root, _dirs, files in os.walk(fragment_directory, onerror=_raise):
        for name in files:
            path = os.path.abspath(os.path.join(root, name))
            if path in skipped or not os.path.isfile(path):
                continue
            found.append(path)

    return sorted(found)


def merge(fragment_directory, expected_checksum, destination_path, delete_fragments_after=False,
          checksum_fn=file_checksum):
    """
    Reconstructs a file from the fragments found in ``fragment_directory``.

    Args:
        fragment_directory (str): Directory holding the fragments.
        expected_checksum (str): Hex checksum the merged file must have.
        destination_path (str): Path of the reconstructed file.
        delete_fragments_after (bool): Remove the fragments once the merged
            file passed verification.
        checksum_fn (callable): Maps a file path to its hex checksum.

    Returns:
        MergeResult: ``destination`` is set when the checksum matched.

    Raises:
        ValidationError: If the fragment directory or destination is invalid.
    """
    if not os.path.isdir(fragment_directory):
        raise ValidationError(f"No valid fragment directory: {fragment_directory}")

    try:
        fragments = discover_fragments(fragment_directory, exclude=[destination_path])
    except OSError as e:
        log(f"Could not list fragments in {fragment_directory}: {e}", context="MERGER")
        result = MergeResult()
        result.fail(TransferError(f"Error while listing fragments in {fragment_directory}: {e}", cause=e))
        return result

    log(f"Found {len(fragments)} fragment(s) in {fragment_directory}", context="MERGER")
    return merge_fragments(fragments, expected_checksum, destination_path,
                           delete_fragments_after=delete_fragments_after, checksum_fn=checksum_fn)


def merge_fragments(fragments, expected_checksum, destination_path, delete_fragments_after=False,
                    checksum_fn=file_checksum):
    """
    Concatenates ``fragments`` in the given order into ``destination_path``
    and verifies the result against ``expected_checksum``.

    A checksum mismatch leaves the merged file and the fragments on disk; the
    result carries an IntegrityError and no destination.
    """
    fragments = [str(f) for f in fragments]
    for fragment in fragments:
        if not os.path.isfile(fragment):
            raise ValidationError(f"Fragment {fragment} has to be an existing file")
    if os.path.abspath(destination_path) in {os.path.abspath(f) for f in fragments}:
        raise ValidationError(f"Merged file {destination_path} is one of the fragments to merge")
    _prepare_destination(destination_path)

    result = MergeResult(fragments=fragments)

    try:
        with open(destination_path, "wb") as out_file:
            for fragment in fragments:
                with open(fragment, "rb") as cf:
                    shutil.copyfileobj(cf, out_file, COPY_BUFFER_SIZE)
    except OSError as e:
        log(f"Merge into {destination_path} failed: {e}", context="MERGER")
        result.fail(TransferError(f"Error while merging fragments into {destination_path}: {e}", cause=e))
        return result

    try:
        actual = checksum_fn(destination_path)
    except OSError as e:
        result.fail(TransferError(f"Could not read back {destination_path}: {e}", cause=e))
        return result

    result.actual_checksum = actual
    if actual != expected_checksum:
        log(f"Checksum mismatch for {destination_path}: expected {expected_checksum}, got {actual}",
            context="MERGER")
        result.fail(IntegrityError(expected_checksum, actual, path=str(destination_path)))
        return result

    if delete_fragments_after:
        _delete_fragments(fragments)

    result.destination = str(destination_path)
    log(f"Reconstructed file saved at: {destination_path}", context="MERGER")
    return result


def _prepare_destination(destination_path):
    parent = os.path.dirname(os.path.abspath(destination_path))
    try:
        os.makedirs(parent, exist_ok=True)
    except OSError as e:
        raise ValidationError(f"Could not create destination directory {parent}: {e}") from e
    if not os.path.isdir(parent):
        raise ValidationError(f"Merged file location is not valid: {parent}")
    if os.path.isdir(destination_path):
        raise ValidationError(f"Merged file location is a directory: {destination_path}")


def _delete_fragments(fragments):
    for fragment in fragments:
        try:
            os.remove(fragment)
        except OSError as e:
            log(f"Could not delete fragment {fragment}: {e}", context="MERGER")
