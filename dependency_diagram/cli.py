"""CLI for dependency-diagram."""

import sys
from pathlib import Path
from typing import Annotated, Literal

import structlog
from cyclopts import App, Parameter

from dependency_diagram.config import SETTINGS, get_config, renderer_from_config
from dependency_diagram.config_commands import config_app
from dependency_diagram.loader import load_diagram

logger = structlog.get_logger()

app = App(
    name="dependency-diagram",
    help="Dependency Diagram - Render entity graphs as yUML images",
)

app.command(config_app)


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level.

    Logs go to stderr so command output on stdout stays clean.
    """
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


@app.command
def encode(graph_file: Path) -> None:
    """Print the yUML notation of a graph description file."""
    diagram = load_diagram(graph_file)
    print(diagram.to_yuml_string())


@app.command
def render(
    graph_file: Path,
    output: Path,
    style: Literal["plain", "scruffy"] | None = None,
) -> None:
    """Render a graph description file to an image."""
    config = get_config()
    style = style or config.get("renderer.style", SETTINGS["renderer.style"])

    diagram = load_diagram(graph_file)
    size = diagram.generate(output, style, renderer_from_config(config))
    print(f"Wrote {size} bytes to {output}")


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    app(tokens)


if __name__ == "__main__":
    app.meta()
