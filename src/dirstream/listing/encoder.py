# Canonical entry records and their NDJSON encoding.
# Created: 2026-10-19

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from typing import Any

from dirstream.listing.metadata import ResolvedEntry

# Extension reported for files whose name has none.
NO_EXTENSION = "file"

PERMISSIONS_WIDTH = 11


def format_permissions(mode: int) -> str:
    """Octal mode digits, zero-padded to 11 characters (e.g. ``00000100644``)."""
    return format(mode, "o").zfill(PERMISSIONS_WIDTH)


def file_extension(name: str) -> str:
    ext = os.path.splitext(name)[1][1:]
    return ext or NO_EXTENSION


@dataclass(slots=True)
class EntryRecord:
    """One streamed record; field order is the wire order."""

    name: str
    path: str
    size: int | None
    isDirectory: bool
    created: int
    modified: int
    permissions: str
    extension: str | None
    type: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class RecordEncoder:
    """Encodes resolved entries under *root* as single NDJSON lines."""

    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    def client_path(self, full_path: str) -> str:
        """Root-relative path with forward slashes, always starting with ``/``."""
        relative = os.path.relpath(full_path, self.root)
        if relative == os.curdir:
            return "/"
        if os.sep != "/":
            relative = relative.replace(os.sep, "/")
        return "/" + relative

    def to_record(self, entry: ResolvedEntry) -> EntryRecord:
        is_dir = entry.is_dir
        return EntryRecord(
            name=entry.name,
            path=self.client_path(entry.full_path),
            size=None if is_dir else entry.size,
            isDirectory=is_dir,
            created=entry.created_ms or entry.modified_ms,
            modified=entry.modified_ms,
            permissions=format_permissions(entry.mode),
            extension=None if is_dir else file_extension(entry.name),
            type="directory" if is_dir else "file",
        )

    def encode(self, entry: ResolvedEntry) -> bytes:
        # ensure_ascii escapes control characters and lone surrogates from
        # undecodable names, so the output never contains a raw newline.
        line = json.dumps(self.to_record(entry).to_dict(), separators=(",", ":"))
        return line.encode("ascii") + b"\n"
