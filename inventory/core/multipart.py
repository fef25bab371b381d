"""
Minimal multipart/form-data decoder.

The whole request body is buffered before parsing. Parts are delimited by
``--<boundary>``; each part's headers end at the first blank line. Parts
without a ``Content-Disposition`` header or without a ``name`` are skipped.
File payloads are kept as raw bytes. Text fields keep only the first line
of their value.

Malformed input never raises: a missing boundary yields an empty mapping
and a truncated body yields whatever parts could be read. Callers are
expected to check for the fields they need.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto

_BOUNDARY_RE = re.compile(r'boundary=(?:"([^"]+)"|([^;\s]+))', re.IGNORECASE)
_NAME_RE = re.compile(r'(?:^|;)\s*name="([^"]*)"', re.IGNORECASE)
_FILENAME_RE = re.compile(r'(?:^|;)\s*filename="([^"]*)"', re.IGNORECASE)


@dataclass(frozen=True)
class FilePart:
    filename: str
    data: bytes
    content_type: str | None = None


FieldValue = str | FilePart


class _State(Enum):
    SEEKING_BOUNDARY = auto()
    READING_HEADERS = auto()
    READING_BODY = auto()


def extract_boundary(content_type: str) -> str | None:
    match = _BOUNDARY_RE.search(content_type or "")
    if not match:
        return None
    return match.group(1) or match.group(2)


def is_multipart(content_type: str | None) -> bool:
    return bool(content_type) and "multipart/form-data" in content_type.lower()


def _find_blank_line(body: bytes, start: int, end: int) -> tuple[int, int]:
    """Returns (index, separator length) of the first blank line in body[start:end], or (-1, 0)."""
    crlf = body.find(b"\r\n\r\n", start, end)
    lf = body.find(b"\n\n", start, end)
    if crlf != -1 and (lf == -1 or crlf <= lf):
        return crlf, 4
    if lf != -1:
        return lf, 2
    return -1, 0


def _strip_line_break(data: bytes) -> bytes:
    # The line break before a delimiter belongs to the delimiter, not the payload
    if data.endswith(b"\r\n"):
        return data[:-2]
    if data.endswith(b"\n"):
        return data[:-1]
    return data


def _parse_headers(raw: bytes) -> dict[str, str]:
    headers = {}
    for line in raw.decode("utf-8", errors="replace").splitlines():
        key, sep, value = line.partition(":")
        if sep:
            headers[key.strip().lower()] = value.strip()
    return headers


def _first_line(data: bytes) -> str:
    for index, byte in enumerate(data):
        if byte in (0x0D, 0x0A):
            data = data[:index]
            break
    return data.decode("utf-8", errors="replace")


def _build_field(headers: dict[str, str], data: bytes) -> tuple[str, FieldValue] | None:
    disposition = headers.get("content-disposition")
    if disposition is None:
        return None

    name_match = _NAME_RE.search(disposition)
    if not name_match:
        return None
    name = name_match.group(1)

    filename_match = _FILENAME_RE.search(disposition)
    if filename_match:
        return name, FilePart(
            filename=filename_match.group(1),
            data=data,
            content_type=headers.get("content-type"),
        )
    return name, _first_line(data)


def parse_multipart(body: bytes, content_type: str) -> dict[str, FieldValue]:
    """
    Decodes ``body`` into a mapping of field name to text value or FilePart.

    A repeated field name keeps the last value seen.
    """
    fields: dict[str, FieldValue] = {}

    boundary = extract_boundary(content_type)
    if not boundary:
        return fields

    delimiter = b"--" + boundary.encode("latin-1")
    state = _State.SEEKING_BOUNDARY
    position = 0
    headers: dict[str, str] = {}

    while position <= len(body):
        if state is _State.SEEKING_BOUNDARY:
            found = body.find(delimiter, position)
            if found == -1:
                break
            position = found + len(delimiter)
            if body.startswith(b"--", position):
                break  # closing delimiter
            line_end = body.find(b"\n", position)
            position = len(body) if line_end == -1 else line_end + 1
            state = _State.READING_HEADERS

        elif state is _State.READING_HEADERS:
            next_delimiter = body.find(delimiter, position)
            segment_end = len(body) if next_delimiter == -1 else next_delimiter
            blank, sep_len = _find_blank_line(body, position, segment_end)
            if blank == -1:
                # No header/body separator: headers only, empty value
                headers = _parse_headers(body[position:segment_end])
                position = segment_end
            else:
                headers = _parse_headers(body[position:blank])
                position = blank + sep_len
            state = _State.READING_BODY

        else:
            next_delimiter = body.find(delimiter, position)
            segment_end = len(body) if next_delimiter == -1 else next_delimiter
            data = _strip_line_break(body[position:segment_end])
            field = _build_field(headers, data)
            if field is not None:
                name, value = field
                fields[name] = value
            position = segment_end
            headers = {}
            state = _State.SEEKING_BOUNDARY
            if next_delimiter == -1:
                break

    return fields
