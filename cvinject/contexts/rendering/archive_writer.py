"""
Store-only ZIP archive writer.

Builds the container format used by OOXML packages (.docx) without
compression: every entry is saved with method 0 and its CRC-32 is computed
here. Layout of the output, in order:

    [local file header + name + data] * N
    [central directory record + name] * N
    end of central directory record

All integers are little-endian. Times and dates are written as zero so the
same parts always produce the same bytes.
"""

import io
import struct
from dataclasses import dataclass
from typing import List, Mapping, Union

from cvinject.contexts.rendering.exceptions import ArchiveError

CRC32_POLYNOMIAL = 0xEDB88320

LOCAL_FILE_HEADER_SIGNATURE = 0x04034B50
CENTRAL_DIRECTORY_SIGNATURE = 0x02014B50
END_OF_CENTRAL_DIRECTORY_SIGNATURE = 0x06054B50

# signature, version needed, flags, method, mod time, mod date, crc,
# compressed size, uncompressed size, name length, extra length
LOCAL_FILE_HEADER = struct.Struct("<IHHHHHIIIHH")

# signature, version made by, version needed, flags, method, mod time, mod date,
# crc, compressed size, uncompressed size, name length, extra length,
# comment length, disk start, internal attrs, external attrs, local header offset
CENTRAL_DIRECTORY_RECORD = struct.Struct("<IHHHHHHIIIHHHHHII")

# signature, this disk, central directory disk, entries on disk, total entries,
# central directory size, central directory offset, comment length
END_OF_CENTRAL_DIRECTORY = struct.Struct("<IHHHHIIH")

ZIP_VERSION = 20
METHOD_STORED = 0
FLAG_UTF8_NAME = 0x0800

MAX_ENTRIES = 0xFFFF
MAX_UINT32 = 0xFFFFFFFF
MAX_NAME_LENGTH = 0xFFFF


def make_crc32_table() -> List[int]:
    """Build the 256-entry lookup table for the reflected IEEE polynomial."""
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = (CRC32_POLYNOMIAL ^ (c >> 1)) if c & 1 else (c >> 1)
        table.append(c)
    return table


CRC32_TABLE = make_crc32_table()


def crc32(data: bytes) -> int:
    """
    Standard CRC-32 (as used by ZIP, PNG and zlib).

    Example:
        >>> hex(crc32(b"123456789"))
        '0xcbf43926'
        >>> crc32(b"")
        0
    """
    crc = 0xFFFFFFFF
    for byte in data:
        crc = (crc >> 8) ^ CRC32_TABLE[(crc ^ byte) & 0xFF]
    return crc ^ 0xFFFFFFFF


@dataclass
class ArchiveEntry:
    """Bookkeeping for one stored entry, needed again for the central directory."""

    name: bytes
    crc: int
    size: int
    offset: int
    flags: int = 0


class ArchiveWriter:
    """
    Incremental store-only ZIP builder.

    Entries are written to an in-memory buffer as they are added; finish()
    appends the central directory and end record and returns the archive.

    Usage:
        writer = ArchiveWriter()
        writer.add("[Content_Types].xml", content_types_xml)
        writer.add("word/document.xml", document_xml)
        data = writer.finish()
    """

    def __init__(self):
        self._buffer = io.BytesIO()
        self._entries: List[ArchiveEntry] = []
        self._finished = False

    @property
    def entries(self) -> List[ArchiveEntry]:
        return list(self._entries)

    def add(self, path: str, content: Union[str, bytes]) -> ArchiveEntry:
        """
        Append one entry.

        Args:
            path: Entry name inside the archive, "/"-separated
            content: Text (encoded as UTF-8) or raw bytes

        Returns:
            The recorded ArchiveEntry

        Raises:
            ArchiveError: If the archive is finished or a ZIP32 limit is exceeded
        """
        if self._finished:
            raise ArchiveError("Cannot add entries to a finished archive")
        if len(self._entries) >= MAX_ENTRIES:
            raise ArchiveError(f"Too many entries for a ZIP32 archive (max {MAX_ENTRIES})")

        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        name = path.encode("utf-8")
        if len(name) > MAX_NAME_LENGTH:
            raise ArchiveError(f"Entry name too long: {path[:60]}...")

        offset = self._buffer.tell()
        if offset > MAX_UINT32 or len(data) > MAX_UINT32:
            raise ArchiveError(f"Entry '{path}' exceeds ZIP32 size limits")

        flags = 0 if path.isascii() else FLAG_UTF8_NAME
        entry = ArchiveEntry(name=name, crc=crc32(data), size=len(data), offset=offset, flags=flags)

        self._buffer.write(
            LOCAL_FILE_HEADER.pack(
                LOCAL_FILE_HEADER_SIGNATURE,
                ZIP_VERSION,
                entry.flags,
                METHOD_STORED,
                0,
                0,
                entry.crc,
                entry.size,
                entry.size,
                len(name),
                0,
            )
        )
        self._buffer.write(name)
        self._buffer.write(data)

        self._entries.append(entry)
        return entry

    def finish(self) -> bytes:
        """
        Write the central directory and end record, then return the archive bytes.

        Raises:
            ArchiveError: If the central directory would not fit ZIP32 offsets
        """
        if self._finished:
            return self._buffer.getvalue()

        directory_offset = self._buffer.tell()
        for entry in self._entries:
            self._buffer.write(
                CENTRAL_DIRECTORY_RECORD.pack(
                    CENTRAL_DIRECTORY_SIGNATURE,
                    ZIP_VERSION,
                    ZIP_VERSION,
                    entry.flags,
                    METHOD_STORED,
                    0,
                    0,
                    entry.crc,
                    entry.size,
                    entry.size,
                    len(entry.name),
                    0,
                    0,
                    0,
                    0,
                    0,
                    entry.offset,
                )
            )
            self._buffer.write(entry.name)
        directory_size = self._buffer.tell() - directory_offset

        if directory_offset > MAX_UINT32 or directory_size > MAX_UINT32:
            raise ArchiveError("Central directory exceeds ZIP32 limits")

        self._buffer.write(
            END_OF_CENTRAL_DIRECTORY.pack(
                END_OF_CENTRAL_DIRECTORY_SIGNATURE,
                0,
                0,
                len(self._entries),
                len(self._entries),
                directory_size,
                directory_offset,
                0,
            )
        )

        self._finished = True
        return self._buffer.getvalue()


def pack_archive(parts: Mapping[str, Union[str, bytes]]) -> bytes:
    """
    Pack named parts into a store-only ZIP archive, in mapping order.

    Args:
        parts: Entry name -> text (UTF-8 encoded) or bytes

    Returns:
        Complete archive bytes

    Example:
        >>> data = pack_archive({"hello.txt": "hi"})
        >>> data[:4]
        b'PK\\x03\\x04'
    """
    writer = ArchiveWriter()
    for path, content in parts.items():
        writer.add(path, content)
    return writer.finish()
