"""Parse X11 cursor files (Xcursor) into raw ARGB bitmaps.

File header (16 bytes, little-endian)::

    magic  header  version  ntoc

    magic == 0x72756358  ('Xcur' in the file)
    header == size of the file header in bytes, at least 16

Table of contents (``ntoc`` x 12 bytes)::

    type  subtype  position

    type == 0xFFFD0002 for image chunks, subtype == nominal size

Image chunk (36 bytes + pixels)::

    header  type  subtype  version  width  height  xhot  yhot  delay
    pixels[width * height]   packed 32-bit ARGB, row-major

Size selection follows libXcursor: the nominal size closest to the request
wins, the first one listed on ties, and the first image of that size (the
first animation frame) is returned.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path

from theme_thumb.core.exceptions import DecodeError

XCURSOR_MAGIC = 0x72756358
XCURSOR_IMAGE_TYPE = 0xFFFD0002

_FILE_HEADER = "<4I"
_FILE_HEADER_LEN = 16
_TOC_ENTRY = "<3I"
_TOC_ENTRY_LEN = 12
_CHUNK_HEADER = "<9I"
_CHUNK_HEADER_LEN = 36

_MAX_TOC = 0x10000
_MAX_IMAGE_SIZE = 0x7FFF


@dataclass(frozen=True)
class XcursorImage:
    """One decoded cursor frame."""

    nominal_size: int
    width: int
    height: int
    xhot: int
    yhot: int
    delay: int
    pixels: bytes


@dataclass(frozen=True)
class _TocEntry:
    type: int
    subtype: int
    position: int


def parse_xcursor(data: bytes, size: int) -> XcursorImage:
    """Decode the frame of *data* that best matches *size*.

    Args:
        data: Raw bytes of an Xcursor file.
        size: Requested nominal size in pixels.

    Returns:
        The first frame of the closest nominal size.

    Raises:
        DecodeError: On a bad header, a truncated file or no image chunks.
    """
    if size < 0:
        msg = f"Cursor size must be >= 0, got {size}"
        raise DecodeError(msg)

    toc = _read_toc(data)
    best = _find_best_size(toc, size)
    if best is None:
        msg = "Xcursor file contains no images"
        raise DecodeError(msg)

    entry = next(e for e in toc if e.type == XCURSOR_IMAGE_TYPE and e.subtype == best)
    return _read_image(data, entry)


def load_xcursor(path: Path, size: int) -> XcursorImage:
    """Read *path* and decode the frame closest to *size*.

    Raises:
        DecodeError: If the file cannot be read or parsed.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read cursor file '{path}'"
        raise DecodeError(msg) from exc
    return parse_xcursor(data, size)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _read_toc(data: bytes) -> list[_TocEntry]:
    if len(data) < _FILE_HEADER_LEN:
        msg = f"Xcursor data too short ({len(data)} bytes)"
        raise DecodeError(msg)

    magic, header_len, _version, ntoc = struct.unpack_from(_FILE_HEADER, data, 0)
    if magic != XCURSOR_MAGIC:
        msg = f"Not an Xcursor file (magic {magic:#010x})"
        raise DecodeError(msg)
    if header_len < _FILE_HEADER_LEN or ntoc > _MAX_TOC:
        msg = f"Corrupt Xcursor header (header={header_len}, ntoc={ntoc})"
        raise DecodeError(msg)
    if header_len + ntoc * _TOC_ENTRY_LEN > len(data):
        msg = "Xcursor table of contents is truncated"
        raise DecodeError(msg)

    return [
        _TocEntry(*struct.unpack_from(_TOC_ENTRY, data, header_len + i * _TOC_ENTRY_LEN)) for i in range(ntoc)
    ]


def _find_best_size(toc: list[_TocEntry], size: int) -> int | None:
    best: int | None = None
    for entry in toc:
        if entry.type != XCURSOR_IMAGE_TYPE:
            continue
        if best is None or abs(entry.subtype - size) < abs(best - size):
            best = entry.subtype
    return best


def _read_image(data: bytes, entry: _TocEntry) -> XcursorImage:
    if entry.position + _CHUNK_HEADER_LEN > len(data):
        msg = f"Xcursor image chunk at {entry.position} is truncated"
        raise DecodeError(msg)

    header_len, chunk_type, subtype, _version, width, height, xhot, yhot, delay = struct.unpack_from(
        _CHUNK_HEADER, data, entry.position
    )
    if header_len < _CHUNK_HEADER_LEN or chunk_type != entry.type or subtype != entry.subtype:
        msg = f"Xcursor chunk at {entry.position} does not match its table entry"
        raise DecodeError(msg)
    if not (0 < width <= _MAX_IMAGE_SIZE and 0 < height <= _MAX_IMAGE_SIZE):
        msg = f"Invalid Xcursor image dimensions {width}x{height}"
        raise DecodeError(msg)
    if xhot > width or yhot > height:
        msg = f"Xcursor hotspot ({xhot}, {yhot}) lies outside {width}x{height}"
        raise DecodeError(msg)

    start = entry.position + header_len
    end = start + width * height * 4
    if end > len(data):
        msg = f"Xcursor pixel data truncated ({len(data) - start} of {end - start} bytes)"
        raise DecodeError(msg)

    return XcursorImage(
        nominal_size=subtype,
        width=width,
        height=height,
        xhot=xhot,
        yhot=yhot,
        delay=delay,
        pixels=data[start:end],
    )
