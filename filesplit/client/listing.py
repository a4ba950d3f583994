import os

from filesplit.core import ValidationError, discover_fragments, parse_fragment_name


def describe_fragments(fragment_dir):
    """
    Parses every fragment name in ``fragment_dir``.

    Returns:
        Tuple[List[Tuple[str, FragmentName, int]], List[str]]: parsed
        ``(path, name, size)`` entries in merge order, and paths whose
        names could not be parsed.
    """
    parsed, unknown = [], []
    for path in discover_fragments(fragment_dir):
        try:
            parsed.append((path, parse_fragment_name(path), os.path.getsize(path)))
        except ValueError:
            unknown.append(path)
    return parsed, unknown


def missing_ordinals(parsed):
    """Ordinals absent from each (source name, checksum, total) group."""
    groups = {}
    for _path, name, _size in parsed:
        key = (name.original_name, name.checksum, name.total)
        groups.setdefault(key, set()).add(name.ordinal)
    return {
        key: sorted(set(range(1, key[2] + 1)) - present)
        for key, present in groups.items()
        if len(present) != key[2]
    }


def list_fragments(fragment_dir):
    """
    Prints the fragments in ``fragment_dir`` and any gaps in their ordinals.

    Returns:
        int: 0 if every fragment set is complete, 1 otherwise, 2 on invalid arguments.
    """
    try:
        parsed, unknown = describe_fragments(fragment_dir)
    except ValidationError as e:
        print(f"[ERROR] {e}")
        return 2

    if not parsed and not unknown:
        print("[INFO] No fragments found.")
        return 1

    for path, name, size in parsed:
        print(f"[{name.ordinal}/{name.total}] {name.original_name} {name.checksum[:12]} {size} bytes")
    for path in unknown:
        print(f"[WARN] Not a fragment: {os.path.basename(path)}")

    gaps = missing_ordinals(parsed)
    for (original_name, checksum, total), ordinals in gaps.items():
        print(f"[FAIL] {original_name} ({checksum[:12]}) is missing part(s) {ordinals} of {total}")

    return 1 if gaps or unknown else 0
