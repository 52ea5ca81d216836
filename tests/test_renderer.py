"""Tests for the yUML renderer."""

from pathlib import Path

import httpx
import pytest

from dependency_diagram.renderer import DEFAULT_BASE_URL, Style, YumlRenderer


def make_renderer(handler, requests: list[httpx.Request] | None = None) -> YumlRenderer:
    """Create a renderer whose requests go to handler."""

    def record(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)

    return YumlRenderer(transport=httpx.MockTransport(record))


def test_build_url_substitutes_style() -> None:
    """Test the request target layout."""
    renderer = YumlRenderer()
    assert DEFAULT_BASE_URL == "https://yuml.me/diagram/TYPE/class/"
    assert renderer.build_url("[A]->[B], ", "scruffy") == "https://yuml.me/diagram/scruffy/class/[A]->[B], "
    assert renderer.build_url("", Style.PLAIN) == "https://yuml.me/diagram/plain/class/"


def test_build_url_custom_base() -> None:
    """Test a custom base URL template."""
    renderer = YumlRenderer(base_url="http://localhost:8080/TYPE/")
    assert renderer.build_url("[A]", "plain") == "http://localhost:8080/plain/[A]"


def test_unknown_style_rejected() -> None:
    """Test that styles outside the fixed set are invalid."""
    with pytest.raises(ValueError, match="Unknown style"):
        YumlRenderer().build_url("[A]", "fancy")


def test_open_stream_yields_response_bytes() -> None:
    """Test streaming the rendered image."""
    requests: list[httpx.Request] = []
    renderer = make_renderer(lambda request: httpx.Response(200, content=b"PNGDATA"), requests)

    with renderer.open_stream("[A]uses->[B], ", "scruffy") as chunks:
        data = b"".join(chunks)

    assert data == b"PNGDATA"
    assert len(requests) == 1
    assert requests[0].method == "GET"
    assert requests[0].url.host == "yuml.me"
    assert requests[0].url.path.startswith("/diagram/scruffy/class/")


def test_render_to_file(tmp_path: Path) -> None:
    """Test rendering straight into a file."""
    renderer = make_renderer(lambda request: httpx.Response(200, content=b"\x89PNG" * 4096))
    target = tmp_path / "diagram.png"

    size = renderer.render_to_file("[A]->[B], ", "plain", target)

    assert size == 4 * 4096
    assert target.read_bytes() == b"\x89PNG" * 4096


def test_not_found_raises(tmp_path: Path) -> None:
    """Test that an error status fails without writing the destination."""
    renderer = make_renderer(lambda request: httpx.Response(404, content=b"missing"))
    target = tmp_path / "diagram.png"

    with pytest.raises(httpx.HTTPStatusError):
        renderer.render_to_file("[A]->[B], ", "plain", target)

    assert not target.exists()


def test_connection_error_propagates(tmp_path: Path) -> None:
    """Test that transport failures reach the caller unchanged."""

    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    renderer = make_renderer(fail)

    with pytest.raises(httpx.ConnectError):
        renderer.render_to_file("[A]->[B], ", "plain", tmp_path / "diagram.png")

    assert list(tmp_path.iterdir()) == []
