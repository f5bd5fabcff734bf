"""Serialization of call options into request bodies.

Options without binary content are sent as ``application/x-www-form-urlencoded``.
As soon as one value is binary (bytes, a file-like object or a ``FileUpload``)
the whole body switches to ``multipart/form-data``.
"""

from __future__ import annotations

import io
import json
import logging
import math
import os
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

import httpx

DEFAULT_FILENAME = "Untitled"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_BINARY_TYPES = (bytes, bytearray, memoryview)

logger = logging.getLogger("slack_web_client.serializer")


@dataclass(frozen=True)
class FileUpload:
    """Binary option value with an explicit filename and content type."""

    content: Union[bytes, BinaryIO]
    filename: Optional[str] = None
    content_type: Optional[str] = None


@dataclass(frozen=True)
class SerializedBody:
    content: bytes
    headers: Dict[str, str] = field(default_factory=dict)
    multipart: bool = False


def is_binary(value: Any) -> bool:
    if isinstance(value, (FileUpload,) + _BINARY_TYPES):
        return True
    if isinstance(value, io.TextIOBase):
        return False
    return callable(getattr(value, "read", None))


def stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (str, int)):
        return str(value)
    return json.dumps(value, separators=(",", ":"))


def serialize_call_options(options: Mapping[str, Any]) -> SerializedBody:
    flattened: List[Tuple[str, Any]] = []
    contains_binary = False
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, io.TextIOBase):
            raise TypeError(f"Option {key!r} is a text stream; open files for upload in binary mode")
        if is_binary(value):
            contains_binary = True
            flattened.append((key, value))
        else:
            flattened.append((key, stringify(value)))

    if contains_binary:
        logger.debug("request arguments contain binary data")
        return _multipart(flattened)

    return SerializedBody(
        content=urlencode(flattened).encode("utf-8"),
        headers={"Content-Type": FORM_CONTENT_TYPE},
    )


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _multipart(flattened: List[Tuple[str, Any]]) -> SerializedBody:
    fields: Dict[str, str] = {}
    files: List[Tuple[str, Tuple[str, Any, Optional[str]]]] = []
    for key, value in flattened:
        if isinstance(value, str):
            fields[key] = value
        else:
            files.append((key, _file_entry(value)))

    encoded = httpx.Request("POST", "https://multipart.invalid/", data=fields, files=files)
    content = encoded.read()
    return SerializedBody(
        content=content,
        headers={"Content-Type": encoded.headers["Content-Type"]},
        multipart=True,
    )


def _file_entry(value: Any) -> Tuple[str, Any, Optional[str]]:
    content_type: Optional[str] = None
    filename: Optional[str] = None
    if isinstance(value, FileUpload):
        filename = value.filename
        content_type = value.content_type
        value = value.content
    if filename is None:
        name = getattr(value, "name", None)
        filename = name if isinstance(name, str) else None
    if isinstance(value, (bytearray, memoryview)):
        value = bytes(value)
    return os.path.basename(filename) if filename else DEFAULT_FILENAME, value, content_type


__all__ = [
    "DEFAULT_FILENAME",
    "FORM_CONTENT_TYPE",
    "FileUpload",
    "SerializedBody",
    "is_binary",
    "serialize_call_options",
    "stringify",
]
