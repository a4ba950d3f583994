import math
import os

import pytest

from filesplit.core import (
    CHECKSUM_UNAVAILABLE,
    Status,
    TransferError,
    ValidationError,
    compute_checksum,
    file_checksum,
    parse_fragment_name,
    split,
)
from filesplit.core import splitter


@pytest.mark.parametrize("size, chunk_size", [(2500, 1024), (2048, 1024), (1023, 1024), (999, 1), (5, 2)])
def test_fragment_count_is_ceiling(make_source, tmp_path, size, chunk_size):
    result = split(make_source(size), chunk_size, tmp_path / "chunks")

    assert len(result.fragments) == math.ceil(size / chunk_size)
    assert all(os.path.getsize(p) > 0 for p in result.fragments)


def test_exact_multiple_has_no_empty_fragment(make_source, tmp_path):
    result = split(make_source(2048), 1024, tmp_path / "chunks")

    assert [os.path.getsize(p) for p in result.fragments] == [1024, 1024]
    assert result.fragments[-1].endswith(".splitPart2_2")


def test_fragment_names_sort_in_ordinal_order(make_source, tmp_path):
    # 999 fragments: ordinals padded to three digits
    result = split(make_source(999), 1, tmp_path / "chunks")

    names = [os.path.basename(p) for p in result.fragments]
    shuffled = list(reversed(names))
    ordinals = [parse_fragment_name(n).ordinal for n in sorted(shuffled)]

    assert ordinals == list(range(1, 1000))
    assert names[0].endswith(".splitPart001_999")
    assert names[98].endswith(".splitPart099_999")


def test_padding_tracks_total_width(make_source, tmp_path):
    result = split(make_source(12), 1, tmp_path / "chunks")

    assert result.fragments[0].endswith(".splitPart01_12")
    assert result.fragments[-1].endswith(".splitPart12_12")


def test_checksum_matches_source(make_source, tmp_path, sha256):
    source = make_source(5000)
    result = split(source, 333, tmp_path / "chunks")

    assert result.checksum == sha256(source)
    assert {parse_fragment_name(p).checksum for p in result.fragments} == {result.checksum}


def test_injected_checksum_is_used(make_source, tmp_path):
    result = split(make_source(10), 4, tmp_path / "chunks", checksum_fn=lambda path: "abc123")

    assert result.checksum == "abc123"
    assert "-Checksum-abc123-ChecksumEnd" in result.fragments[0]


@pytest.mark.parametrize("chunk_size", [0, -1, 1.5, True, "1024"])
def test_invalid_chunk_size_is_rejected(make_source, tmp_path, chunk_size):
    target = tmp_path / "chunks"

    with pytest.raises(ValidationError):
        split(make_source(100), chunk_size, target)

    assert not target.exists()


def test_missing_source_is_rejected(tmp_path):
    with pytest.raises(ValidationError):
        split(tmp_path / "nope.bin", 10, tmp_path / "chunks")


def test_directory_source_is_rejected(tmp_path):
    with pytest.raises(ValidationError):
        split(tmp_path, 10, tmp_path / "chunks")


def test_missing_target_without_create_is_rejected(make_source, tmp_path):
    with pytest.raises(ValidationError):
        split(make_source(100), 10, tmp_path / "missing", create_target=False)


def test_missing_target_is_created_by_default(make_source, tmp_path):
    target = tmp_path / "a" / "b"
    result = split(make_source(100), 10, target)

    assert result.ok
    assert len(os.listdir(target)) == 10


def test_target_that_is_a_file_is_rejected(make_source, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"x")

    with pytest.raises(ValidationError):
        split(make_source(100), 10, blocker)


def test_write_failure_cleans_up_fragments(make_source, tmp_path, monkeypatch):
    target = tmp_path / "chunks"
    calls = []
    real_write = splitter._write_fragment

    def failing_write(source, fragment_path, offset, length):
        calls.append(fragment_path)
        if len(calls) == 3:
            with open(fragment_path, "wb") as f:
                f.write(b"partial")
            raise OSError("disk full")
        real_write(source, fragment_path, offset, length)

    monkeypatch.setattr(splitter, "_write_fragment", failing_write)

    result = split(make_source(100), 10, target)

    assert result.status is Status.FAILURE
    assert result.checksum == CHECKSUM_UNAVAILABLE
    assert result.fragments == []
    assert len(result.errors) == 1
    assert isinstance(result.errors[0], TransferError)
    assert result.error_kind is TransferError
    assert "disk full" in result.error_messages[0]
    assert os.listdir(target) == []
    with pytest.raises(TransferError):
        result.raise_for_status()


def test_checksum_failure_is_a_transfer_error(make_source, tmp_path):
    def broken_checksum(path):
        raise OSError("read error")

    result = split(make_source(100), 10, tmp_path / "chunks", checksum_fn=broken_checksum)

    assert result.status is Status.FAILURE
    assert result.error_kind is TransferError
    assert result.checksum == CHECKSUM_UNAVAILABLE


def test_short_source_read_is_a_transfer_error(make_source, tmp_path):
    source = make_source(10)
    fragment = tmp_path / "fragment"

    with open(source, "rb") as f:
        with pytest.raises(TransferError):
            splitter._write_fragment(f, fragment, 5, 10)


def test_cleanup_tolerates_delete_failure(tmp_path, monkeypatch):
    fragment = tmp_path / "fragment"
    fragment.write_bytes(b"x")

    def refuse(path):
        raise PermissionError("locked")

    monkeypatch.setattr(splitter.os, "remove", refuse)

    splitter._cleanup([str(fragment)])

    assert fragment.exists()


def test_file_checksum_matches_bytes_checksum(make_source):
    source = make_source(200000)

    assert file_checksum(source) == compute_checksum(source.read_bytes())


@pytest.mark.parametrize("buffer_size", [0, -1])
def test_non_positive_copy_buffer_is_rejected(make_source, tmp_path, monkeypatch, buffer_size):
    monkeypatch.setattr(splitter, "COPY_BUFFER_SIZE", buffer_size)
    target = tmp_path / "chunks"

    with pytest.raises(ValidationError):
        split(make_source(3000), 1024, target)

    assert not target.exists()


def test_small_copy_buffer_keeps_fragment_sizes(make_source, tmp_path, monkeypatch):
    monkeypatch.setattr(splitter, "COPY_BUFFER_SIZE", 7)

    result = split(make_source(3000), 1024, tmp_path / "chunks")

    assert [os.path.getsize(p) for p in result.fragments] == [1024, 1024, 952]


def test_buffer_larger_than_fragment_reads_only_fragment(make_source, tmp_path, monkeypatch):
    monkeypatch.setattr(splitter, "COPY_BUFFER_SIZE", 1 << 20)

    result = split(make_source(3000), 1024, tmp_path / "chunks")

    assert [os.path.getsize(p) for p in result.fragments] == [1024, 1024, 952]


@pytest.mark.parametrize("piece_size", [0, -1])
def test_file_checksum_rejects_non_positive_piece_size(make_source, piece_size):
    with pytest.raises(ValidationError):
        file_checksum(make_source(5000), piece_size=piece_size)
