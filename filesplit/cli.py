import argparse
import re

from filesplit import __version__
from filesplit.common import DEFAULT_CHUNK_SIZE, setup_logging
from filesplit.client.listing import list_fragments
from filesplit.client.merge import merge_file
from filesplit.client.split import split_file

_UNITS = {"": 1, "B": 1, "K": 1024, "M": 1024 ** 2, "G": 1024 ** 3}


def parse_size(text):
    """Parse ``"4096"``, ``"64K"``, ``"10M"`` or ``"1G"`` into a byte count."""
    match = re.fullmatch(r"\s*(\d+)\s*([KMGB]?)(?:i?B)?\s*", str(text), re.IGNORECASE)
    if not match:
        raise argparse.ArgumentTypeError(f"invalid size: {text!r}")
    size = int(match.group(1)) * _UNITS[match.group(2).upper()]
    if size <= 0:
        raise argparse.ArgumentTypeError("chunk size must be greater than zero")
    return size


def build_parser():
    parser = argparse.ArgumentParser(
        prog="filesplit",
        description="Split files into checksummed fragments and merge them back.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-dir", default=None, help="Directory for per-component log files")
    sub = parser.add_subparsers(dest="command", required=True)

    p_split = sub.add_parser("split", help="Split a file into fragments")
    p_split.add_argument("source", help="File to split")
    p_split.add_argument("target_dir", help="Directory for the fragments")
    p_split.add_argument("--chunk-size", type=parse_size, default=DEFAULT_CHUNK_SIZE,
                         help="Fragment size, e.g. 4096, 64K, 10M (default: %(default)s bytes)")
    p_split.add_argument("--no-create", action="store_true",
                         help="Fail instead of creating a missing target directory")

    p_merge = sub.add_parser("merge", help="Merge fragments back into one file")
    p_merge.add_argument("fragment_dir", help="Directory holding the fragments")
    p_merge.add_argument("destination", help="Path of the reconstructed file")
    p_merge.add_argument("--checksum", help="Expected SHA-256; read from the fragment names if omitted")
    p_merge.add_argument("--delete", action="store_true", help="Delete the fragments after merging")

    p_inspect = sub.add_parser("inspect", help="List fragments and report missing parts")
    p_inspect.add_argument("fragment_dir", help="Directory holding the fragments")

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_dir)

    if args.command == "split":
        return split_file(args.source, args.target_dir, args.chunk_size, create_target=not args.no_create)
    if args.command == "merge":
        return merge_file(args.fragment_dir, args.destination, checksum=args.checksum,
                          delete_fragments=args.delete)
    return list_fragments(args.fragment_dir)
