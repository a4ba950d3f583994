import os

from filesplit.core import ValidationError, split


def split_file(file_path, target_dir, chunk_size, create_target=True):
    """
    Splits ``file_path`` into ``target_dir`` and reports each fragment.

    Returns:
        int: 0 on success, 1 if the split failed, 2 on invalid arguments.
    """
    try:
        result = split(file_path, chunk_size, target_dir, create_target=create_target)
    except ValidationError as e:
        print(f"[ERROR] {e}")
        return 2

    if not result.ok:
        for message in result.error_messages:
            print(f"[FAIL] {message}")
        return 1

    for fragment in result.fragments:
        print(f"[OK] {os.path.basename(fragment)} ({os.path.getsize(fragment)} bytes)")

    print(f"\n[SUCCESS] {len(result.fragments)} fragment(s) written to {target_dir}")
    print(f"Checksum: {result.checksum}")
    return 0
