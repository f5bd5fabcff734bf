from __future__ import annotations

import io
from urllib.parse import parse_qsl

import pytest

from slack_web_client.serializer import (
    DEFAULT_FILENAME,
    FORM_CONTENT_TYPE,
    FileUpload,
    is_binary,
    serialize_call_options,
    stringify,
)


def test_plain_options_are_url_encoded_in_input_order() -> None:
    options = {
        "channel": "C1",
        "text": "hi there & welcome",
        "unfurl_links": True,
        "as_user": False,
        "limit": 3,
        "blocks": [{"type": "section", "text": {"type": "mrkdwn", "text": "*x*"}}],
        "thread_ts": None,
    }

    body = serialize_call_options(options)

    assert body.multipart is False
    assert body.headers == {"Content-Type": FORM_CONTENT_TYPE}
    assert parse_qsl(body.content.decode("utf-8")) == [
        ("channel", "C1"),
        ("text", "hi there & welcome"),
        ("unfurl_links", "true"),
        ("as_user", "false"),
        ("limit", "3"),
        ("blocks", '[{"type":"section","text":{"type":"mrkdwn","text":"*x*"}}]'),
    ]


def test_url_encoding_is_stable() -> None:
    options = {"b": "2", "a": "1", "c": {"k": [1, 2]}}
    assert serialize_call_options(options).content == serialize_call_options(dict(options)).content
    assert serialize_call_options(options).content.startswith(b"b=2&a=1&c=")


def test_bytes_switch_to_multipart_with_default_filename() -> None:
    body = serialize_call_options({"channels": "C1", "file": b"hello world", "title": None})

    assert body.multipart is True
    content_type = body.headers["Content-Type"]
    assert content_type.startswith("multipart/form-data; boundary=")
    boundary = content_type.split("boundary=", 1)[1]
    assert boundary.encode() in body.content
    assert b'name="channels"' in body.content
    assert f'name="file"; filename="{DEFAULT_FILENAME}"'.encode() in body.content
    assert b"hello world" in body.content
    assert b'name="title"' not in body.content


def test_named_file_objects_use_their_basename() -> None:
    handle = io.BytesIO(b"a,b\n1,2\n")
    handle.name = "/var/data/report.csv"

    body = serialize_call_options({"file": handle, "filetype": "csv"})

    assert body.multipart is True
    assert b'filename="report.csv"' in body.content
    assert b"a,b\n1,2\n" in body.content


def test_file_upload_carries_filename_and_content_type() -> None:
    upload = FileUpload(content=b"\x89PNG", filename="shots/screen.png", content_type="image/png")

    body = serialize_call_options({"file": upload})

    assert b'filename="screen.png"' in body.content
    assert b"Content-Type: image/png" in body.content


def test_binary_detection() -> None:
    assert is_binary(b"x")
    assert is_binary(bytearray(b"x"))
    assert is_binary(memoryview(b"x"))
    assert is_binary(io.BytesIO(b"x"))
    assert is_binary(FileUpload(content=b"x"))
    assert not is_binary("x")
    assert not is_binary({"read": "not callable"})


def test_stringify() -> None:
    assert stringify(True) == "true"
    assert stringify(0) == "0"
    assert stringify(1.5) == "1.5"
    assert stringify("text") == "text"
    assert stringify({"a": [1, None]}) == '{"a":[1,null]}'
    assert stringify(1.0) == "1"
    assert stringify(-3.0) == "-3"
    assert stringify(0.25) == "0.25"
    assert stringify(float("inf")) == "Infinity"
    assert stringify(float("-inf")) == "-Infinity"
    assert stringify(float("nan")) == "NaN"


def test_text_streams_are_not_binary() -> None:
    assert not is_binary(io.StringIO("hello"))

    with pytest.raises(TypeError, match="'content' is a text stream"):
        serialize_call_options({"channels": "C1", "content": io.StringIO("hello")})
