"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Request body encoding and header merging.
"""

from __future__ import annotations

import json
import mimetypes
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from urllib3 import encode_multipart_formdata
from urllib3.filepost import choose_boundary


class FormData:
    """Multipart form payload.

    The payload owns its boundary, so the headers it reports always match
    the bytes it encodes.

    Example::

        form = FormData()
        form.add_field("title", "report")
        form.add_file("file", "report.pdf", pdf_bytes)
        await client.post("/uploads", form)
    """

    def __init__(self, boundary: Optional[str] = None) -> None:
        self._boundary = boundary or choose_boundary()
        self._fields: List[Tuple[str, Any]] = []

    @property
    def boundary(self) -> str:
        return self._boundary

    def add_field(self, name: str, value: Union[str, int, float]) -> "FormData":
        """Append a plain form field."""
        self._fields.append((name, str(value)))
        return self

    def add_file(
        self,
        name: str,
        filename: str,
        data: Union[bytes, str],
        content_type: Optional[str] = None,
    ) -> "FormData":
        """Append a file part. The content type is guessed from the filename if omitted."""
        if content_type is None:
            content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        self._fields.append((name, (filename, data, content_type)))
        return self

    def get_headers(self) -> Dict[str, str]:
        """Headers the payload requires on the request."""
        return {"Content-Type": f"multipart/form-data; boundary={self._boundary}"}

    def encode(self) -> bytes:
        """Encode all parts into the multipart body."""
        body, _ = encode_multipart_formdata(self._fields, boundary=self._boundary)
        return body

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        names = [name for name, _ in self._fields]
        return f"FormData(boundary={self._boundary!r}, fields={names!r})"


Body = Union[str, FormData, Any]


def encode_body(body: Body) -> Union[str, FormData, None]:
    """
    Encode a request body for the transport.

    Strings and FormData pass through unchanged, None means no body,
    every other value is serialized to compact JSON text.
    """
    if body is None:
        return None
    if isinstance(body, str):
        return body
    if isinstance(body, FormData):
        return body
    return json.dumps(body, separators=(",", ":"))


def _update_headers(merged: Dict[str, str], source: Mapping[str, str]) -> None:
    for name, value in source.items():
        lowered = name.lower()
        for existing in [key for key in merged if key.lower() == lowered]:
            del merged[existing]
        merged[name] = value


def merge_headers(
    default_headers: Optional[Mapping[str, str]],
    call_headers: Optional[Mapping[str, str]] = None,
    body: Body = None,
) -> Dict[str, str]:
    """
    Merge default, per-call and payload headers.

    Later sources win key for key, header names compared case-insensitively:
    call headers override defaults, and the headers of a FormData body
    override both. The winning source's spelling of the name is kept.
    Inputs are not modified.
    """
    merged: Dict[str, str] = {}
    _update_headers(merged, default_headers or {})
    _update_headers(merged, call_headers or {})

    if isinstance(body, FormData):
        _update_headers(merged, body.get_headers())

    return merged
