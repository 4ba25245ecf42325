from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dynrec.core import descriptors as d
from dynrec.core.errors import LayoutMismatch, UndefinedFieldAccess
from dynrec.core.util import declare0, declare2
from dynrec.io import (
    IoDecodeError,
    IoSettings,
    IoWriteError,
    iter_records,
    read_records,
    write_records,
)


def _person():
    return declare2(name="person", f1_name="name", f1_type=d.STRING, f2_name="age", f2_type=d.INT)


def _people(person, name, age):
    ada = person.make()
    ada.set(name, "Ada")
    ada.set(age, 36)
    alan = person.make()
    alan.set(name, "Alan")
    return [ada, alan]


def test_write_then_read_roundtrip(tmp_path: Path) -> None:
    person, name, age = _person()
    records = _people(person, name, age)
    settings = IoSettings(root_dir=str(tmp_path))

    summary = write_records("runs/people.jsonl", records, settings)

    final = tmp_path / "runs" / "people.jsonl"
    assert summary["path"] == str(final)
    assert summary["layout"] == "person"
    assert summary["rows"] == 2
    assert summary["bytes"] == final.stat().st_size
    assert final.read_text().splitlines() == [
        '{"name":"Ada","age":36}',
        '{"name":"Alan"}',
    ]
    assert not (tmp_path / "runs" / "people.jsonl.tmp").exists()

    back = read_records("runs/people.jsonl", person, settings)
    assert back == records
    with pytest.raises(UndefinedFieldAccess):
        back[1].get(age)


def test_canonical_setting_sorts_keys(tmp_path: Path) -> None:
    person, name, age = _person()
    settings = IoSettings(root_dir=str(tmp_path), canonical=True, fsync=False)

    write_records("p.jsonl", _people(person, name, age)[:1], settings)

    assert (tmp_path / "p.jsonl").read_text() == '{"age":36,"name":"Ada"}\n'


def test_write_rejects_mixed_layouts_and_writes_nothing(tmp_path: Path) -> None:
    person, name, age = _person()
    other = declare0(name="other")
    records = _people(person, name, age) + [other.make()]

    with pytest.raises(LayoutMismatch):
        write_records(tmp_path / "mixed.jsonl", records)

    assert not (tmp_path / "mixed.jsonl").exists()


def test_write_empty_batch(tmp_path: Path) -> None:
    person, _, _ = _person()

    summary = write_records(tmp_path / "empty.jsonl", [], layout=person)

    assert summary["rows"] == 0 and summary["layout"] == "person"
    assert read_records(tmp_path / "empty.jsonl", person) == []


def test_read_reports_failing_line(tmp_path: Path) -> None:
    person, _, _ = _person()
    src = tmp_path / "bad.jsonl"
    src.write_text('{"name":"Ada"}\n\n{"name":42}\n')

    with pytest.raises(IoDecodeError) as excinfo:
        read_records(src, person)

    err = excinfo.value
    assert err.line == 3
    assert err.reason.startswith("name: ")
    assert str(src) in str(err)


def test_read_reports_invalid_json(tmp_path: Path) -> None:
    person, _, _ = _person()
    src = tmp_path / "broken.jsonl"
    src.write_text('{"name":"Ada"}\n{"name":\n')

    with pytest.raises(IoDecodeError, match="invalid JSON") as excinfo:
        read_records(src, person)
    assert excinfo.value.line == 2


def test_blank_lines_fail_when_not_skipped(tmp_path: Path) -> None:
    person, _, _ = _person()
    src = tmp_path / "blank.jsonl"
    src.write_text('{"name":"Ada"}\n\n')

    with pytest.raises(IoDecodeError):
        read_records(src, person, IoSettings(skip_blank_lines=False))


def test_iter_records_is_lazy(tmp_path: Path) -> None:
    person, name, _ = _person()
    src = tmp_path / "lazy.jsonl"
    src.write_text('{"name":"Ada"}\n{"name":42}\n')

    it = iter_records(src, person)

    assert next(it).get(name) == "Ada"
    with pytest.raises(IoDecodeError):
        next(it)


def test_write_and_read_log_at_info(tmp_path: Path, caplog) -> None:
    person, name, age = _person()

    with caplog.at_level(logging.INFO, logger="dynrec.io"):
        write_records(tmp_path / "log.jsonl", _people(person, name, age))
        read_records(tmp_path / "log.jsonl", person)

    assert "wrote 2 record(s)" in caplog.text
    assert "read 2 record(s)" in caplog.text


def test_write_unencodable_text_raises_and_keeps_previous_batch(tmp_path: Path) -> None:
    person, name, age = _person()
    settings = IoSettings(root_dir=str(tmp_path), encoding="ascii")
    write_records("p.jsonl", _people(person, name, age), settings)
    zoe = person.make()
    zoe.set(name, "Zoë")

    with pytest.raises(IoWriteError, match="ascii"):
        write_records("p.jsonl", [zoe], settings)

    assert len(read_records("p.jsonl", person, settings)) == 2
    assert not (tmp_path / "p.jsonl.tmp").exists()


def test_read_undecodable_bytes_raises_decode_error(tmp_path: Path) -> None:
    person, _, _ = _person()
    src = tmp_path / "latin.jsonl"
    src.write_bytes(b'{"name":"Ada"}\n{"name":"Zo\xeb"}\n')

    with pytest.raises(IoDecodeError, match="utf-8") as excinfo:
        read_records(src, person)

    assert excinfo.value.source == str(src)
