from filesplit.core.errors import FileSplitError, IntegrityError, TransferError, ValidationError
from filesplit.core.results import MergeResult, SplitResult, Status
from filesplit.core.naming import FragmentName, build_fragment_name, is_fragment_name, parse_fragment_name
from filesplit.core.checksum import compute_checksum, file_checksum
from filesplit.core.splitter import CHECKSUM_UNAVAILABLE, split
from filesplit.core.merger import discover_fragments, merge, merge_fragments

__all__ = [
    "FileSplitError",
    "IntegrityError",
    "TransferError",
    "ValidationError",
    "MergeResult",
    "SplitResult",
    "Status",
    "FragmentName",
    "build_fragment_name",
    "is_fragment_name",
    "parse_fragment_name",
    "compute_checksum",
    "file_checksum",
    "CHECKSUM_UNAVAILABLE",
    "split",
    "discover_fragments",
    "merge",
    "merge_fragments",
]
