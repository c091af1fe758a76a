import json
import pytest

from asdf_anchor.errors import DownloadError, log_error
from asdf_anchor.logging import (
    CompactJSONRenderer,
    configure_logging,
    get_logger,
    unpack_event,
)


def test_unpack_event():
    """Test dict events are flattened into the event dict"""
    event_dict = {"event": {"event": "download_started", "url": "https://x"}}

    result = unpack_event(None, "info", event_dict)

    assert result == {"event": "download_started", "url": "https://x"}


def test_unpack_event_plain_string():
    event_dict = {"event": "plain message"}
    assert unpack_event(None, "info", event_dict) == {"event": "plain message"}


def test_compact_json_renderer():
    renderer = CompactJSONRenderer()
    output = renderer(None, "info", {
        "timestamp": "2024-01-01T00:00:00",
        "level": "info",
        "event": "binary_ready",
        "line": 10,
        "path": "/tmp/x/bin/anchor",
    })

    data = json.loads(output)
    assert data == {
        "ts": "2024-01-01T00:00:00",
        "lvl": "info",
        "msg": "binary_ready",
        "line": 10,
        "data": {"path": "/tmp/x/bin/anchor"},
    }


def test_compact_json_renderer_without_data():
    output = CompactJSONRenderer()(None, "info", {"level": "debug", "event": "x"})
    assert "data" not in json.loads(output)


def test_configure_logging_writes_to_stderr(capsys):
    configure_logging("DEBUG")
    get_logger("test").info({"event": "hello", "version": "0.31.1"})

    captured = capsys.readouterr()
    assert captured.out == ""
    line = json.loads(captured.err.strip().splitlines()[-1])
    assert line["msg"] == "hello"
    assert line["lvl"] == "info"
    assert line["data"]["version"] == "0.31.1"


def test_configure_logging_filters_level(capsys):
    configure_logging("warning")
    get_logger("test").info({"event": "hidden"})

    assert "hidden" not in capsys.readouterr().err


def test_log_error_includes_details(capsys):
    configure_logging("INFO")
    log_error(DownloadError("https://x", "empty"), context={"version": "0.31.1"})

    line = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert line["lvl"] == "error"
    assert line["data"]["error_type"] == "DownloadError"
    assert line["data"]["details"] == {"url": "https://x", "reason": "empty"}
    assert line["data"]["context"] == {"version": "0.31.1"}
