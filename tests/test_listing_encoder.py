# Tests for RecordEncoder and the wire record.
# Created: 2026-10-19

import json
import os

import pytest

from dirstream.api.v1.schemas.files import FileEntry
from dirstream.listing.encoder import (
    NO_EXTENSION,
    RecordEncoder,
    file_extension,
    format_permissions,
)
from dirstream.listing.metadata import DIRECTORY_MODE, ResolvedEntry

ROOT = os.path.abspath("/data")

WIRE_KEYS = [
    "name",
    "path",
    "size",
    "isDirectory",
    "created",
    "modified",
    "permissions",
    "extension",
    "type",
]


def _file(name, *parents, size=10, created_ms=1000, modified_ms=2000, mode=0o100644):
    return ResolvedEntry(
        name=name,
        full_path=os.path.join(ROOT, *parents, name),
        is_dir=False,
        size=size,
        created_ms=created_ms,
        modified_ms=modified_ms,
        mode=mode,
    )


def _dir(name, *parents):
    return ResolvedEntry(
        name=name,
        full_path=os.path.join(ROOT, *parents, name),
        is_dir=True,
        size=None,
        created_ms=5000,
        modified_ms=5000,
        mode=DIRECTORY_MODE,
    )


@pytest.fixture
def encoder():
    return RecordEncoder(ROOT)


def _decode(line: bytes) -> dict:
    return json.loads(line)


class TestFormatting:
    @pytest.mark.parametrize(
        "mode,expected",
        [
            (0o755, "00000000755"),
            (0o100644, "00000100644"),
            (0o40755, "00000040755"),
            (0, "00000000000"),
        ],
    )
    def test_permissions(self, mode, expected):
        assert format_permissions(mode) == expected

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("a.txt", "txt"),
            ("archive.tar.gz", "gz"),
            ("README", NO_EXTENSION),
            (".bashrc", NO_EXTENSION),
            ("trailing.", NO_EXTENSION),
        ],
    )
    def test_extension(self, name, expected):
        assert file_extension(name) == expected


class TestClientPath:
    def test_root_maps_to_slash(self, encoder):
        assert encoder.client_path(ROOT) == "/"

    def test_top_level(self, encoder):
        assert encoder.client_path(os.path.join(ROOT, "a.txt")) == "/a.txt"

    def test_nested_uses_forward_slashes(self, encoder):
        assert encoder.client_path(os.path.join(ROOT, "x", "y", "z.md")) == "/x/y/z.md"


class TestRecords:
    def test_file_record(self, encoder):
        record = _decode(encoder.encode(_file("a.txt")))
        assert record == {
            "name": "a.txt",
            "path": "/a.txt",
            "size": 10,
            "isDirectory": False,
            "created": 1000,
            "modified": 2000,
            "permissions": "00000100644",
            "extension": "txt",
            "type": "file",
        }

    def test_directory_record(self, encoder):
        record = _decode(encoder.encode(_dir("b")))
        assert record["path"] == "/b"
        assert record["size"] is None
        assert record["isDirectory"] is True
        assert record["extension"] is None
        assert record["type"] == "directory"
        assert record["permissions"] == "00000000755"

    def test_nested_path(self, encoder):
        record = _decode(encoder.encode(_file("c.md", "b")))
        assert record["path"] == "/b/c.md"

    def test_zero_created_falls_back(self, encoder):
        record = _decode(encoder.encode(_file("a.txt", created_ms=0, modified_ms=7777)))
        assert record["created"] == 7777

    def test_key_order(self, encoder):
        assert list(_decode(encoder.encode(_file("a.txt")))) == WIRE_KEYS

    def test_matches_schema(self, encoder):
        for entry in (_file("a.txt"), _dir("b"), _file("README", size=0)):
            model = FileEntry.model_validate_json(encoder.encode(entry))
            assert model.isDirectory == (model.type == "directory")


class TestLineFraming:
    def test_single_trailing_newline(self, encoder):
        line = encoder.encode(_file("a.txt"))
        assert line.endswith(b"\n")
        assert line.count(b"\n") == 1

    def test_newline_in_name_is_escaped(self, encoder):
        line = encoder.encode(_file("evil\nname.txt"))
        assert line.count(b"\n") == 1
        assert _decode(line)["name"] == "evil\nname.txt"

    def test_control_characters_escaped(self, encoder):
        line = encoder.encode(_file("bell\x07\r\x1b.txt"))
        assert line.count(b"\n") == 1
        assert b"\r" not in line
        assert _decode(line)["name"] == "bell\x07\r\x1b.txt"

    def test_undecodable_name_survives(self, encoder):
        name = "raw\udcff.bin"
        line = encoder.encode(_file(name))
        assert line.isascii()
        assert _decode(line)["name"] == name

    def test_non_ascii_name(self, encoder):
        line = encoder.encode(_file("résumé.pdf"))
        assert _decode(line)["name"] == "résumé.pdf"
        assert _decode(line)["extension"] == "pdf"
