"""Remote rendering of yUML notation into images."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from enum import Enum
from pathlib import Path

import httpx
import structlog

from dependency_diagram.sink import write_stream

logger = structlog.get_logger()

DEFAULT_BASE_URL = "https://yuml.me/diagram/TYPE/class/"
DEFAULT_TIMEOUT = 30.0


class Style(Enum):
    """Look and feel understood by the yUML service."""

    PLAIN = "plain"
    SCRUFFY = "scruffy"

    @classmethod
    def parse(cls, value: "str | Style") -> "Style":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(style.value for style in cls)
            raise ValueError(f"Unknown style: {value} (expected one of: {choices})") from None


class Renderer(ABC):
    """Abstract base class for diagram renderers."""

    @abstractmethod
    def open_stream(self, notation: str, style: str | Style) -> AbstractContextManager[Iterator[bytes]]:
        """Open the rendered image of a notation string as a stream of byte chunks.

        The returned context manager releases the underlying connection on exit.
        """
        pass

    def render_to_file(self, notation: str, style: str | Style, path: str | Path) -> int:
        """Render a notation string and write the image to path.

        Returns:
            Number of bytes written
        """
        with self.open_stream(notation, style) as chunks:
            return write_stream(chunks, path)


class YumlRenderer(Renderer):
    """Renderer backed by the yuml.me HTTP service."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize yUML renderer.

        Args:
            base_url: URL template; 'TYPE' is replaced by the style token
            timeout: Request timeout in seconds, None to wait indefinitely
            transport: Custom httpx transport
        """
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    def build_url(self, notation: str, style: str | Style) -> str:
        """Build the request URL; the notation is appended as is."""
        return self.base_url.replace("TYPE", Style.parse(style).value) + notation

    @contextmanager
    def open_stream(self, notation: str, style: str | Style) -> Iterator[Iterator[bytes]]:
        url = self.build_url(notation, style)
        logger.info("Requesting diagram", style=Style.parse(style).value, notation_length=len(notation))
        logger.debug("Diagram request URL", url=url)

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport, follow_redirects=True) as client:
                with client.stream("GET", url) as response:
                    response.raise_for_status()
                    yield response.iter_bytes()
        except httpx.HTTPError as e:
            logger.error("Diagram request failed", url=url, error=str(e))
            raise
