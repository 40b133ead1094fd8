"""CLI entry point: all commands defined here."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from emlinter import __version__
from emlinter.config import EmlinterConfig

app = typer.Typer(
    name="emlinter",
    help="HTML email formatting and dark-mode contrast checks.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"emlinter {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(  # noqa: UP007
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """EMLinter: HTML email tooling."""


def _read_html(path: Path) -> str:
    if not path.is_file():
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(code=1)
    return path.read_text(encoding="utf-8")


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        # Plain print so markup in the HTML is not interpreted by rich.
        typer.echo(text)
        return
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]OK[/green] Written to {output}")


@app.command(name="format")
def format_command(
    html_file: Path = typer.Argument(..., help="HTML file to re-indent."),
    output: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--output", "-o", help="Write here instead of stdout.",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Config YAML."),  # noqa: UP007
) -> None:
    """Re-indent HTML, formatting <style> blocks and inline styles."""
    from emlinter.formatting.markup import format_html

    cfg = EmlinterConfig.load(config)
    html = _read_html(html_file)
    _emit(format_html(html, indent=cfg.format.indent), output)


@app.command()
def minify(
    html_file: Path = typer.Argument(..., help="HTML file to minify."),
    output: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--output", "-o", help="Write here instead of stdout.",
    ),
    keep_head: bool = typer.Option(False, "--keep-head", help="Leave <head> untouched."),
    keep_styles: bool = typer.Option(False, "--keep-styles", help="Leave <style> blocks untouched."),
    config: Optional[Path] = typer.Option(None, "--config", help="Config YAML."),  # noqa: UP007
) -> None:
    """Collapse whitespace and strip comments (Outlook conditionals are kept)."""
    from emlinter.formatting.minify import minify_html
    from emlinter.models import MinifyOptions

    cfg = EmlinterConfig.load(config)
    options = MinifyOptions(
        keep_head=keep_head or cfg.minify.keep_head,
        keep_styles=keep_styles or cfg.minify.keep_styles,
    )
    html = _read_html(html_file)
    _emit(minify_html(html, options), output)


@app.command()
def check(
    html_file: Path = typer.Argument(..., help="HTML file to check."),
    report: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--report", "-r", help="Also write a report to this path.",
    ),
    report_format: Optional[str] = typer.Option(  # noqa: UP007
        None, "--format", "-f", help="Report format: json or markdown.",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Config YAML."),  # noqa: UP007
) -> None:
    """Check text contrast in light mode and inverted dark mode."""
    from emlinter.analyzer import ContrastAnalyzer
    from emlinter.dom.static import StaticDocument
    from emlinter.models import ContrastReport

    cfg = EmlinterConfig.load(config)
    html = _read_html(html_file)

    analyzer = ContrastAnalyzer(threshold=cfg.contrast.threshold, step=cfg.contrast.step)
    results = analyzer.analyze(StaticDocument.from_html(html))
    result = ContrastReport(source_name=html_file.name, results=results)

    if not results:
        console.print("[green]OK[/green] All text passes in light and dark mode.")
    else:
        table = Table(title=f"Contrast Report: {html_file.name}")
        table.add_column("Element", style="bold")
        table.add_column("Text")
        table.add_column("Background")
        table.add_column("Light")
        table.add_column("Dark")
        table.add_column("Suggestion")

        for r in results:
            light = f"{r.light_mode_contrast:.2f}"
            dark = f"{r.dark_mode_contrast:.2f}"
            table.add_row(
                escape(f"<{r.element_tag}> {r.element_text}"),
                r.original_text_color,
                r.original_bg_color,
                light if r.passes_light else f"[red]{light}[/red]",
                dark if r.passes_dark else f"[red]{dark}[/red]",
                f"[green]{r.suggestion}[/green]",
            )
        console.print(table)
        console.print(
            f"[yellow]{len(results)} colour pair(s)[/yellow] below "
            f"{cfg.contrast.threshold}:1 "
            f"({result.failing_light_count} light, {result.failing_dark_count} dark)."
        )

    if report is not None:
        from emlinter.reporter import write_report

        fmt = report_format or cfg.output.report_format
        if fmt not in ("json", "markdown"):
            console.print(f"[red]Unknown report format:[/red] {fmt}")
            raise typer.Exit(code=1)
        write_report(result, report, fmt)
        console.print(f"[dim]Report written to {report}[/dim]")


@app.command()
def serve(
    port: int = typer.Option(8080, "--port", "-p", help="Port to serve on."),
    host: str = typer.Option("127.0.0.1", "--host", help="Host to bind to."),
) -> None:
    """Start the JSON API for formatting and contrast checks."""
    try:
        import uvicorn
    except ImportError:
        console.print(
            "[red]The API requires extra dependencies.[/red]\n"
            "Install them with: [bold]pip install emlinter\\[web\\][/bold]"
        )
        raise typer.Exit(code=1)

    from emlinter.web.app import create_app

    console.print(f"[dim]Serving API at http://{host}:{port}[/dim]")
    uvicorn.run(create_app(), host=host, port=port, log_level="warning")
