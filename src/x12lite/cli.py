import logging
from pathlib import Path

import orjson
import typer
from rich.console import Console
from rich.logging import RichHandler

from x12lite.config import ShowConfig, load_config
from x12lite.document import Document
from x12lite.errors import X12Error
from x12lite.files import collect_paths, parse_after, read_text
from x12lite.read import Value
from x12lite.sample import synthetic_interchange
from x12lite.show import Highlighter, render

app = typer.Typer(help="Inspect, query and edit X12 EDI files.")
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger("x12lite")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load(path: Path, ignore: bool) -> Document | None:
    """Read and parse one file; malformed files abort unless ``ignore``."""
    try:
        text = read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("unable to read file %s: %s", path, exc)
        return None
    try:
        return Document(text)
    except X12Error as exc:
        if ignore:
            logger.warning("skipping malformed X12 file %s: %s", path, exc)
            return None
        err_console.print(f"[bold red]ERROR:[/] malformed X12 file: {path} ({exc})")
        raise typer.Exit(1) from exc


def _selectors(specs: list[str]) -> list[str]:
    selectors = [part.strip() for spec in specs for part in spec.split(",") if part.strip()]
    if not selectors:
        raise typer.BadParameter("At least one selector is required.")
    return selectors


def _format(value: Value | None) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ",".join(str(item) for item in value)
    return str(value)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug detail to stderr."),
) -> None:
    """Inspect, query and edit X12 EDI files."""
    _setup_logging(verbose)


@app.command()
def show(
    paths: list[Path] | None = typer.Argument(None, help="Files or directories to list."),
    after: str | None = typer.Option(
        None, "--after", "-a", help="Only files modified after 'YYYYMMDD' or 'YYYYMMDD HHMMSS'."
    ),
    count: bool = typer.Option(False, "--count", "-c", help="Count messages at the end."),
    dive: bool = typer.Option(False, "--dive", "-d", help="Dive into directories recursively."),
    ignore: bool = typer.Option(False, "--ignore", "-i", help="Ignore malformed X12 files."),
    lower: bool = typer.Option(False, "--lower", "-l", help="Show segment names in lowercase."),
    message: bool = typer.Option(False, "--message", "-m", help="Show message body."),
    path: bool = typer.Option(False, "--path", "-p", help="Show path for each message."),
    spacer: bool = typer.Option(
        False, "--spacer", "-s", help="Show an empty line between messages."
    ),
    deep: bool = typer.Option(False, "--deep", help="One line per repetition."),
    only: bool = typer.Option(False, "--only", help="First occurrence of each segment only."),
    hide: bool = typer.Option(False, "--hide", help="Hide the field listing."),
    ansi: bool = typer.Option(False, "--ansi", help="Highlight values with ANSI colours."),
    tab: bool = typer.Option(False, "--tab", help="Tab-delimited label and value."),
    left: int | None = typer.Option(None, "--left", help="Label column width."),
    config: Path | None = typer.Option(None, "--config", help="YAML/JSON file of show options."),
) -> None:
    """List the fields of each X12 message."""
    base = load_config(config) if config else ShowConfig()
    flags = dict(
        after=after, count=count, dive=dive, ignore=ignore, lower=lower, message=message,
        path=path, spacer=spacer, deep=deep, only=only, hide=hide, ansi=ansi, tab=tab, left=left,
    )
    cfg = base.merged(**flags)
    if all(value is None or value is False for value in flags.values()):
        cfg = cfg.merged(message=True)  # no presentation flag: show the body as well

    if not paths:
        if not cfg.dive:
            raise typer.BadParameter("Give at least one file or directory (or use --dive).")
        paths = [Path(".")]
    try:
        since = parse_after(cfg.after) if cfg.after else None
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    highlighter = Highlighter(cfg.foreground, cfg.background)
    msgs = 0
    for file in collect_paths(paths, dive=cfg.dive, after=since):
        if cfg.spacer and msgs > 0:
            typer.echo()
        if cfg.path:
            typer.echo(f"\n==[ {file} ]==\n")
        doc = _load(file, cfg.ignore)
        if doc is None:
            continue
        for line in render(doc, cfg, highlighter):
            typer.echo(line, color=cfg.ansi or None)
        msgs += 1

    if cfg.count and msgs > 0:
        console.print(f"\nTotal messages: {msgs}")


@app.command()
def query(
    paths: list[Path] = typer.Argument(..., help="Files or directories to query."),
    select: list[str] = typer.Option(
        ..., "--select", "-q", help="Comma-separated selectors, e.g. 'ISA-6,GS-2,EB(?)'."
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit one JSON object per file."),
    dive: bool = typer.Option(False, "--dive", "-d", help="Dive into directories recursively."),
    ignore: bool = typer.Option(False, "--ignore", "-i", help="Ignore malformed X12 files."),
) -> None:
    """Read selectors from each file in one pass."""
    selectors = _selectors(select)
    for file in collect_paths(paths, dive=dive):
        doc = _load(file, ignore)
        if doc is None:
            continue
        try:
            results = doc.find(*selectors)
        except X12Error as exc:
            raise typer.BadParameter(str(exc)) from exc
        if json_output:
            payload = {"path": str(file), "selectors": selectors, "values": results}
            typer.echo(orjson.dumps(payload).decode())
        else:
            typer.echo("\t".join([str(file), *(_format(value) for value in results)]))


@app.command()
def edit(
    input: Path = typer.Argument(..., help="X12 file to edit."),
    assignments: list[str] = typer.Option(
        ..., "--set", "-s", help="SELECTOR=VALUE, applied in order (repeatable)."
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the result here instead of stdout."
    ),
    normalize: bool = typer.Option(
        False, "--normalize", help="Upper-case values and blank out disallowed characters."
    ),
) -> None:
    """Apply selector writes to a file and emit the result."""
    pairs: list[tuple[str, str]] = []
    for entry in assignments:
        if "=" not in entry:
            raise typer.BadParameter(f"Assignment must be SELECTOR=VALUE, got '{entry}'")
        selector, value = entry.split("=", 1)
        pairs.append((selector.strip(), value))

    doc = _load(input, ignore=False)
    if doc is None:
        raise typer.BadParameter(f"Input file not found: {input}")
    try:
        for selector, value in pairs:
            doc.set(selector, value, normalize=normalize)
    except X12Error as exc:
        raise typer.BadParameter(str(exc)) from exc

    text = doc.to_text()
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        console.print(f"[bold green]Wrote[/] {len(doc)} segments to {output}")
    else:
        typer.echo(text)


@app.command()
def sample(
    output: Path = typer.Argument(..., help="Path to write the synthetic interchange."),
    members: int = typer.Option(2, "--members", "-n", help="HL/NM1 loops to emit."),
    benefits: int = typer.Option(3, "--benefits", "-b", help="EB segments per member."),
    seed: int = typer.Option(1234, "--seed", help="Seed for reproducible generation."),
    control: int = typer.Option(1, "--control", help="Interchange control number."),
) -> None:
    """Generate a synthetic 271 interchange for fixtures and experiments."""
    doc = synthetic_interchange(members=members, benefits=benefits, seed=seed, control=control)
    output.write_text(doc.to_text() + "\n", encoding="utf-8")
    console.print(f"[bold green]Wrote[/] {len(doc)} segments to {output}")


if __name__ == "__main__":
    app()
