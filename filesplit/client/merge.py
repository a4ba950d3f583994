from filesplit.core import (
    IntegrityError,
    ValidationError,
    discover_fragments,
    merge,
    parse_fragment_name,
)


def recover_checksum(fragment_dir, exclude=()):
    """Reads the source checksum out of the first fragment name in ``fragment_dir``."""
    fragments = discover_fragments(fragment_dir, exclude=exclude)
    if not fragments:
        raise ValidationError(f"No fragments found in {fragment_dir}")
    try:
        return parse_fragment_name(fragments[0]).checksum
    except ValueError as e:
        raise ValidationError(f"Cannot recover checksum: {e}") from e


def merge_file(fragment_dir, output_path, checksum=None, delete_fragments=False):
    """
    Merges the fragments in ``fragment_dir`` into ``output_path``.

    Returns:
        int: 0 on success, 1 if the merge failed, 2 on invalid arguments.
    """
    try:
        expected = checksum or recover_checksum(fragment_dir, exclude=[output_path])
        result = merge(fragment_dir, expected, output_path, delete_fragments_after=delete_fragments)
    except ValidationError as e:
        print(f"[ERROR] {e}")
        return 2

    if not result.ok:
        if result.error_kind is IntegrityError:
            print("⚠️ Files differ. Hash mismatch.")
            print(f"Expected Hash     : {expected}")
            print(f"Reconstructed Hash: {result.actual_checksum}")
        for message in result.error_messages:
            print(f"[FAIL] {message}")
        return 1

    print(f"✅ Reconstructed file saved at: {result.destination}")
    print(f"Checksum: {result.actual_checksum}")
    return 0
