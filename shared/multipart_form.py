"""
Streaming multipart/form-data reader.

Reads every part as a ``(name, text)`` pair in arrival order, which is what
parse_submission() consumes. Unlike Starlette's form parser it tolerates
parts without a ``name`` (reported with an empty name, so they are skipped
downstream) and stops quietly at the first malformed part, keeping the parts
already read.
"""

from __future__ import annotations

from typing import AsyncIterable

from python_multipart.exceptions import FormParserError, MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from errors import ValidationError
from shared.logging import get_logger

log = get_logger(__name__)

MULTIPART_FORM_DATA = b"multipart/form-data"
MAX_PART_SIZE = 1024 * 1024


class _PartCollector:
    """Callback sink for MultipartParser; accumulates completed parts."""

    def __init__(self, max_part_size: int) -> None:
        self.parts: list[tuple[str, str]] = []
        self._max_part_size = max_part_size
        self._name = ""
        self._data = bytearray()
        self._headers: dict[bytes, bytes] = {}
        self._header_field = b""
        self._header_value = b""

    def callbacks(self) -> dict:
        return {
            "on_part_begin": self.on_part_begin,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_headers_finished": self.on_headers_finished,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
        }

    def on_part_begin(self) -> None:
        self._name = ""
        self._data = bytearray()
        self._headers = {}

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        self._headers[self._header_field.lower()] = self._header_value.strip()
        self._header_field = b""
        self._header_value = b""

    def on_headers_finished(self) -> None:
        disposition = self._headers.get(b"content-disposition", b"")
        _, options = parse_options_header(disposition)
        self._name = options.get(b"name", b"").decode("utf-8", errors="replace")

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._data += data[start:end]
        if len(self._data) > self._max_part_size:
            raise ValidationError("Form field is too large.", field=self._name or None)

    def on_part_end(self) -> None:
        try:
            value = bytes(self._data).decode("utf-8")
        except UnicodeDecodeError:
            value = ""
        self.parts.append((self._name, value))


async def read_multipart_fields(
    content_type: str,
    chunks: AsyncIterable[bytes],
    max_part_size: int = MAX_PART_SIZE,
) -> list[tuple[str, str]]:
    """Read a multipart body into ``(name, text)`` pairs.

    Args:
        content_type: The request's Content-Type header value.
        chunks: The raw body, e.g. ``request.stream()``.
        max_part_size: Upper bound on any single part's payload, in bytes.

    Returns:
        Completed parts in arrival order. A part without a ``name`` has
        ``""`` as its name; a part that is not valid UTF-8 has ``""`` as
        its value.

    Raises:
        ValidationError: the body is not multipart/form-data, has no
            usable boundary, or a part exceeds *max_part_size*.
    """
    mime_type, params = parse_options_header(content_type)
    if mime_type != MULTIPART_FORM_DATA:
        raise ValidationError("Request body must be multipart/form-data.")
    boundary = params.get(b"boundary")
    if not boundary:
        raise ValidationError("Multipart boundary is missing.")

    collector = _PartCollector(max_part_size)
    try:
        parser = MultipartParser(boundary, collector.callbacks())
    except FormParserError:
        raise ValidationError("Multipart boundary is invalid.") from None
    try:
        async for chunk in chunks:
            parser.write(chunk)
        parser.finalize()
    except MultipartParseError as e:
        log.warning(
            "multipart_body_malformed",
            error=str(e),
            parts_read=len(collector.parts),
        )
    return collector.parts
