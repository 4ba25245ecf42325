from __future__ import annotations

from pathlib import Path

from dynrec.io.fs import open_write, remove_if_exists, rename_atomic, tmp_path_for


def test_tmp_path_is_a_sibling_of_the_destination(tmp_path: Path) -> None:
    final = tmp_path / "runs" / "people.jsonl"

    assert tmp_path_for(final) == tmp_path / "runs" / "people.jsonl.tmp"


def test_rename_replaces_previous_batch(tmp_path: Path) -> None:
    final = tmp_path / "people.jsonl"
    final.write_bytes(b"old\n")
    tmp = tmp_path_for(final)

    with open_write(tmp) as fh:
        fh.write(b"new\n")
    rename_atomic(tmp, final)

    assert final.read_bytes() == b"new\n"
    assert not tmp.exists()


def test_remove_if_exists_tolerates_missing_file(tmp_path: Path) -> None:
    remove_if_exists(tmp_path / "absent.jsonl.tmp")
