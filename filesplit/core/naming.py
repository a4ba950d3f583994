"""
Fragment file naming.

A fragment name binds the fragment to its source file, the source checksum,
its ordinal and the size of the split:

    <name>.binary-Checksum-<sha256>-ChecksumEnd.splitPart<ordinal>_<total>

The ordinal is zero-padded to the digit width of the total so that plain
string sorting of the names yields ordinal order.
"""

import re
from dataclasses import dataclass

BINARY = ".binary"
CHECKSUM = "-Checksum-"
CHECKSUM_END = "-ChecksumEnd"
SUFFIX = ".splitPart"

_FRAGMENT_RE = re.compile(
    r"^(?P<original_name>.+)"
    + re.escape(BINARY + CHECKSUM)
    + r"(?P<checksum>[0-9a-f]+)"
    + re.escape(CHECKSUM_END + SUFFIX)
    + r"(?P<ordinal>\d+)_(?P<total>\d+)$"
)


@dataclass(frozen=True)
class FragmentName:
    original_name: str
    checksum: str
    ordinal: int
    total: int

    def __str__(self):
        return build_fragment_name(self.original_name, self.checksum, self.ordinal, self.total)


def pad_ordinal(ordinal: int, total: int) -> str:
    """Left-pad ``ordinal`` with zeros to the digit width of ``total``."""
    return str(ordinal).zfill(len(str(total)))


def build_fragment_name(original_name: str, checksum: str, ordinal: int, total: int) -> str:
    if not 1 <= ordinal <= total:
        raise ValueError(f"Ordinal {ordinal} outside of 1..{total}")
    return (
        f"{original_name}{BINARY}{CHECKSUM}{checksum}{CHECKSUM_END}"
        f"{SUFFIX}{pad_ordinal(ordinal, total)}_{total}"
    )


def parse_fragment_name(name: str) -> FragmentName:
    """
    Recover source name, checksum, ordinal and total from a fragment name.

    Args:
        name (str): Fragment file name (a path is accepted, only the last
            component is parsed).

    Returns:
        FragmentName: The parsed components.

    Raises:
        ValueError: If the name does not follow the fragment layout.
    """
    base = re.split(r"[\\/]", str(name))[-1]
    match = _FRAGMENT_RE.match(base)
    if not match:
        raise ValueError(f"Not a fragment file name: {base}")

    ordinal_text = match.group("ordinal")
    total = int(match.group("total"))
    if len(ordinal_text) != len(str(total)):
        raise ValueError(f"Ordinal {ordinal_text} is not padded to the width of {total}")
    ordinal = int(ordinal_text)
    if not 1 <= ordinal <= total:
        raise ValueError(f"Ordinal {ordinal} outside of 1..{total}")

    return FragmentName(
        original_name=match.group("original_name"),
        checksum=match.group("checksum"),
        ordinal=ordinal,
        total=total,
    )


def is_fragment_name(name: str) -> bool:
    try:
        parse_fragment_name(name)
    except ValueError:
        return False
    return True
