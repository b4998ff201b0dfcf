"""Form data parsing: URL-encoded and multipart.

URL-encoded bodies use stdlib ``urllib.parse``. Multipart bodies use
``python-multipart``'s callback parser. Both produce ``FormData``.

The router reads forms while resolving the method override, so parse
failures surface as ``MalformedForm`` and the router decides what to do
with them; nothing here writes a response.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from switchyard.errors import MalformedForm

URLENCODED = "application/x-www-form-urlencoded"
MULTIPART = "multipart/form-data"
FORM_CONTENT_TYPES = frozenset({URLENCODED, MULTIPART})


def media_type(content_type: str | None) -> str:
    """Return the bare, lower-cased media type of a Content-Type value."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


@dataclass(frozen=True, slots=True)
class UploadFile:
    """An uploaded file from a multipart form submission.

    The content is held in memory; the size is bounded by the limit the
    body was read with.
    """

    filename: str
    content_type: str
    size: int
    _content: bytes

    async def read(self) -> bytes:
        """Return the file content as bytes."""
        return self._content

    def __repr__(self) -> str:
        return f"UploadFile({self.filename!r}, {self.content_type!r}, {self.size} bytes)"


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    ``__getitem__`` returns the first value for a key (string fields only).
    ``get_list`` returns all values for a key.
    ``files`` provides access to uploaded files by field name.

    Usage::

        form = await request.form()
        title = form["title"]
        attachment = form.files.get("attachment")  # UploadFile or None
    """

    __slots__ = ("_data", "_files")

    def __init__(
        self,
        data: dict[str, list[str]],
        files: dict[str, UploadFile] | None = None,
    ) -> None:
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_files", files or {})

    @property
    def files(self) -> Mapping[str, UploadFile]:
        """Uploaded files by field name."""
        return self._files

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"FormData({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (checkboxes, multi-selects)."""
        return list(self._data.get(key, []))


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse a form body into FormData.

    Raises:
        MalformedForm: If the content type is not a form encoding, or the
            body does not parse.
    """
    kind = media_type(content_type)

    if kind == URLENCODED:
        return _parse_urlencoded(body)

    if kind == MULTIPART:
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise MalformedForm(msg)


def _parse_urlencoded(body: bytes) -> FormData:
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedForm("URL-encoded form body is not valid UTF-8") from exc
    return FormData(parse_qs(text, keep_blank_values=True))


class _PartCollector:
    """Callback target for ``MultipartParser``: assembles fields and files."""

    def __init__(self) -> None:
        self.data: dict[str, list[str]] = {}
        self.files: dict[str, UploadFile] = {}
        self._headers: dict[str, str] = {}
        self._header_field = bytearray()
        self._header_value = bytearray()
        self._content = bytearray()

    def callbacks(self) -> dict[str, Any]:
        return {
            "on_part_begin": self.on_part_begin,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
        }

    def on_part_begin(self) -> None:
        self._headers = {}
        self._content = bytearray()

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field.extend(data[start:end])

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value.extend(data[start:end])

    def on_header_end(self) -> None:
        name = self._header_field.decode("latin-1").lower()
        self._headers[name] = self._header_value.decode("latin-1")
        self._header_field = bytearray()
        self._header_value = bytearray()

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._content.extend(data[start:end])

    def on_part_end(self) -> None:
        disposition = self._headers.get("content-disposition")
        if disposition is None:
            return
        _, options = parse_options_header(disposition)
        name = options.get(b"name")
        if name is None:
            return
        field_name = name.decode("utf-8")
        filename = options.get(b"filename")

        if filename is not None:
            content = bytes(self._content)
            self.files[field_name] = UploadFile(
                filename=filename.decode("utf-8"),
                content_type=self._headers.get("content-type", "application/octet-stream"),
                size=len(content),
                _content=content,
            )
        else:
            value = self._content.decode("utf-8", errors="replace")
            self.data.setdefault(field_name, []).append(value)


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    _, options = parse_options_header(content_type)
    boundary = options.get(b"boundary")
    if not boundary:
        msg = "Multipart form data missing boundary parameter"
        raise MalformedForm(msg)

    collector = _PartCollector()
    parser = MultipartParser(boundary, collector.callbacks())
    try:
        parser.write(body)
        parser.finalize()
    except MultipartParseError as exc:
        raise MalformedForm(f"Malformed multipart body: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise MalformedForm("Multipart field name or filename is not valid UTF-8") from exc

    return FormData(collector.data, collector.files)
