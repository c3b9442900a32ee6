"""Command-line entry points for drafting, report intake and news grouping."""

import json
import dataclasses
from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import BaseModel
from rich import print as rprint
from rich.table import Table

from .config import configure_logging, get_settings
from .docx_builder import build_draft_docx
from .event_store import JsonEventStore
from .feeds import feed_from_text, watched_feeds
from .models import FactSheet, SpecItem
from .news_search import NewsSearchNotConfigured, coerce_item
from .reporting import summarize_events
from .similarity import group_news_by_day, group_similar_news
from .text_extraction import UnsupportedFileTypeError
from .workflow import (
    build_feed_timeline,
    build_news_timeline,
    draft_from_fact_sheet,
    draft_from_file,
    process_report_upload,
)

app = typer.Typer(
    help="Draft Korean press releases and track their news coverage."
)


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise typer.BadParameter(f"Could not read JSON from {path}: {exc}")


def _load_fact_sheet(path: Path) -> FactSheet:
    data = _load_json(path)
    if isinstance(data, list):
        if len(data) != 1:
            raise typer.BadParameter("The JSON file must contain exactly one fact sheet.")
        data = data[0]
    if not isinstance(data, dict):
        raise typer.BadParameter("The fact sheet must be a JSON object.")
    return FactSheet.model_validate(data)


def _load_specs(path: Optional[Path]) -> List[SpecItem]:
    if path is None:
        return []
    data = _load_json(path)
    if not isinstance(data, list):
        raise typer.BadParameter("The specs file must contain a JSON array.")
    return [SpecItem.model_validate(item) for item in data]


def _to_plain(value: Any) -> Any:
    """
    Convert models, dataclasses, Paths, and date-like objects into JSON-serializable primitives.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if dataclasses.is_dataclass(value):
        return {f.name: _to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_plain(item) for item in value]
    return value


def _write_output(out_path: Path, text: str, json_payload: Any) -> None:
    suffix = out_path.suffix.lower()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".json":
        out_path.write_text(
            json.dumps(json_payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
    elif suffix == ".docx":
        build_draft_docx(text, out_path)
    else:
        out_path.write_text(text, encoding="utf-8")


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (defaults to LOG_LEVEL or INFO)."
    ),
):
    configure_logging(log_level)


@app.command("draft")
def draft_command(
    fact_sheet_path: Path = typer.Argument(..., help="JSON file with one fact sheet."),
    specs: Optional[Path] = typer.Option(
        None, "--specs", help="Optional JSON array of product specs."
    ),
    pr_type: Optional[str] = typer.Option(
        None, "--pr-type", help="Override the fact sheet's angle (new_product, campaign, ...)."
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Optional output path (.txt, .docx or .json). Defaults to stdout.",
    ),
):
    """Render a press-release draft from a fact sheet."""
    fact_sheet = _load_fact_sheet(fact_sheet_path)
    text = draft_from_fact_sheet(fact_sheet, _load_specs(specs), pr_type)
    if out:
        _write_output(out, text, {"factSheet": _to_plain(fact_sheet), "draft": text})
        rprint(f"[cyan]Wrote output to {out}[/cyan]")
    else:
        typer.echo(text)


@app.command("analyze")
def analyze_command(
    source: Path = typer.Argument(..., help="Source document (pdf, docx, txt, md or image)."),
    specs: Optional[Path] = typer.Option(None, "--specs", help="Optional JSON array of specs."),
    pr_type: Optional[str] = typer.Option(None, "--pr-type", help="Press-release angle."),
    out: Optional[Path] = typer.Option(
        None, "--out", "-o", help="Optional output path (.txt, .docx or .json)."
    ),
):
    """Extract a fact sheet from a source document and draft a release from it."""
    try:
        result = draft_from_file(source, _load_specs(specs), pr_type)
    except UnsupportedFileTypeError as exc:
        raise typer.BadParameter(str(exc))

    if result.message:
        color = "yellow" if result.draft else "red"
        rprint(f"[{color}]{result.message}[/{color}]")
    if result.draft is None:
        raise typer.Exit(code=1)

    if out:
        _write_output(out, result.draft, _to_plain(result))
        rprint(f"[cyan]Wrote output to {out}[/cyan]")
    else:
        typer.echo(result.draft)


@app.command("report-metadata")
def report_metadata_command(
    files: List[Path] = typer.Argument(..., help="Coverage report files."),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Optional JSON output path."),
):
    """Show the date, title and article count derived from each report file."""
    table = Table(title="Coverage reports")
    table.add_column("File")
    table.add_column("Date")
    table.add_column("Title")
    table.add_column("Articles", justify="right")

    rows = []
    for path in files:
        metadata = process_report_upload(path.name, path.read_bytes())
        rows.append({"file": path.name, **_to_plain(metadata)})
        table.add_row(
            path.name,
            metadata.extracted_date.isoformat(),
            metadata.extracted_title,
            str(metadata.article_count),
        )

    rprint(table)
    if out:
        _write_output(out, "", rows)
        rprint(f"[cyan]Wrote output to {out}[/cyan]")


@app.command("group-news")
def group_news_command(
    news_path: Path = typer.Argument(..., help="JSON array of news items (title, link, pubDate)."),
    by_day: bool = typer.Option(
        True, "--by-day/--no-by-day", help="Bucket by local day before grouping."
    ),
    timezone: Optional[str] = typer.Option(None, "--timezone", help="Timezone for day buckets."),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Optional JSON output path."),
):
    """Group similar headlines into stories."""
    raw = _load_json(news_path)
    if isinstance(raw, dict):
        raw = raw.get("items", [])
    items = [item for item in (coerce_item(entry) for entry in raw) if item]

    if by_day:
        timeline = group_news_by_day(items, timezone=timezone or get_settings().timezone)
        payload = _to_plain(timeline)
        for day in timeline:
            rprint(f"[cyan]{day.date.isoformat()}[/cyan] {len(day.groups)} stories")
            for group in day.groups:
                rprint(f"  ({group.count}) {group.main.title}")
    else:
        groups = group_similar_news(items)
        payload = _to_plain(groups)
        for group in groups:
            rprint(f"({group.count}) {group.main.title}")

    if out:
        _write_output(out, "", payload)
        rprint(f"[cyan]Wrote output to {out}[/cyan]")


@app.command("search-news")
def search_news_command(
    query: str = typer.Argument(..., help="Search keyword."),
    pages: Optional[int] = typer.Option(None, "--pages", help="Result pages of 100 to fetch."),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Optional JSON output path."),
):
    """Search Naver news and print the day-by-day story groups."""
    try:
        timeline = build_news_timeline(query, max_pages=pages)
    except NewsSearchNotConfigured as exc:
        rprint(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    for day in timeline:
        total = sum(group.count for group in day.groups)
        rprint(f"[cyan]{day.date.isoformat()}[/cyan] {total} articles, {len(day.groups)} stories")
    if out:
        _write_output(out, "", _to_plain(timeline))
        rprint(f"[cyan]Wrote output to {out}[/cyan]")


@app.command("monitor-feeds")
def monitor_feeds_command(
    feed: Optional[List[str]] = typer.Option(
        None, "--feed", help="Extra feed as NAME=URL or a bare URL. Repeatable."
    ),
    defaults: bool = typer.Option(
        True, "--defaults/--no-defaults", help="Include the built-in feed list."
    ),
    limit: int = typer.Option(20, "--limit", help="Latest items to print."),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Optional JSON output path."),
):
    """Fetch the watched RSS feeds and print the latest items, newest first."""
    sources = watched_feeds(
        [feed_from_text(value) for value in feed or []], include_defaults=defaults
    )
    if not sources:
        raise typer.BadParameter("No feeds to fetch. Pass --feed or keep the defaults.")

    items, timeline = build_feed_timeline(sources)
    table = Table(title=f"Latest from {len(sources)} feeds")
    table.add_column("Source")
    table.add_column("Published")
    table.add_column("Title")
    for item in items[:limit]:
        table.add_row(item.source or "", item.pub_date.strftime("%Y-%m-%d %H:%M"), item.title)
    rprint(table)

    if out:
        _write_output(out, "", {"items": _to_plain(items), "days": _to_plain(timeline)})
        rprint(f"[cyan]Wrote output to {out}[/cyan]")


@app.command("summary")
def summary_command(
    store: Optional[Path] = typer.Option(
        None, "--store", help="Event store JSON (defaults to EVENT_STORE_PATH or data/events.json)."
    ),
):
    """Print coverage totals from the event calendar."""
    event_store = JsonEventStore(store) if store else JsonEventStore.from_settings()
    summary = summarize_events(event_store.load())

    rprint(
        f"[green]{summary.total_events} events, {summary.total_articles} articles[/green]"
    )
    table = Table(title="Articles by month")
    table.add_column("Month")
    table.add_column("Articles", justify="right")
    for month, count in summary.by_month.items():
        table.add_row(month, str(count))
    rprint(table)
    rprint(", ".join(f"{status}: {count}" for status, count in summary.by_status.items()))


def main():
    app()


if __name__ == "__main__":
    main()
