"""
Command-line interface for ae_triage.

Commands:
- analyze: Score a list of extracted entities
- analyze-text: Extract entities from a transcript and score them
- reports: Show the adverse event reports a request would match against
- vocabulary: List the high-risk condition vocabulary
"""

import json
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ae_triage.config import settings
from ae_triage.errors import TriageError
from ae_triage.log import configure_logging
from ae_triage.models import AnalysisResult, EntityCategory, MedicalEntity, RiskLevel

app = typer.Typer(
    name="ae-triage",
    help="Adverse Event Risk Triage CLI",
    no_args_is_help=True,
)
console = Console()

LEVEL_STYLES = {
    RiskLevel.MINIMAL: "green",
    RiskLevel.LOW: "yellow",
    RiskLevel.MODERATE: "dark_orange",
    RiskLevel.HIGH: "bold red",
}


def parse_entity(value: str) -> MedicalEntity:
    """Parse ``text[:CATEGORY]``; category defaults to MEDICAL_CONDITION."""
    text, sep, category = value.rpartition(":")
    if not sep:
        return MedicalEntity(value, EntityCategory.MEDICAL_CONDITION)
    try:
        return MedicalEntity(text, EntityCategory(category.strip().upper()))
    except ValueError:
        raise typer.BadParameter(f"Unknown entity category: {category}") from None


def load_entities(path: Path) -> list[MedicalEntity]:
    """Load ``[{"text": ..., "category": ...}, ...]`` from a JSON file."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data.get("entities", [])
        return [MedicalEntity(item["text"], EntityCategory(item["category"])) for item in data]
    except (OSError, KeyError, TypeError, ValueError) as e:
        raise typer.BadParameter(f"Invalid entities file {path}: {e}") from None


def _build_analyzer(
    reports_file: Path | None,
    limit: int | None = None,
    threshold: float | None = None,
    similarity: str | None = None,
):
    """Apply command-line overrides on top of settings."""
    from ae_triage.analysis import RiskAnalyzer
    from ae_triage.sources import JsonFileReportSource

    updates = {}
    if limit is not None:
        updates["fetch_limit"] = limit
    if threshold is not None:
        updates["match_threshold"] = threshold
    if similarity is not None:
        updates["similarity"] = similarity
    config = settings.model_copy(update=updates)

    source = JsonFileReportSource(reports_file) if reports_file else None
    return RiskAnalyzer.from_settings(config, source=source)


def _render(result: AnalysisResult, as_json: bool) -> None:
    if as_json:
        console.print_json(json.dumps(result.to_dict()))
        return

    style = LEVEL_STYLES[result.risk_level]
    summary = (
        f"Patient: [bold]{result.patient_name or '-'}[/]\n"
        f"Risk: [{style}]{result.risk_level.value} ({result.risk_score})[/]\n"
        f"High-risk conditions: {', '.join(result.high_risk_conditions) or 'none'}"
    )
    console.print(Panel(summary, title="Risk assessment"))

    entities = Table(title="Extracted entities")
    entities.add_column("Text")
    entities.add_column("Category", style="cyan")
    for entity in result.extracted_entities:
        entities.add_row(entity.text, entity.category.value)
    console.print(entities)

    if result.fda_matches:
        matches = Table(title="Adverse event report matches")
        matches.add_column("Symptom")
        matches.add_column("Reaction")
        matches.add_column("Drug", style="cyan")
        matches.add_column("Report")
        matches.add_column("Serious")
        for m in result.fda_matches:
            matches.add_row(
                m.symptom,
                m.reaction,
                m.drug,
                m.report_id,
                "[red]yes[/]" if m.serious else "no",
            )
        console.print(matches)
    else:
        console.print("[dim]No adverse event report matches[/]")


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="Logging level (default from settings)"
    ),
):
    """Adverse event risk triage."""
    configure_logging(log_level.upper() if log_level else None)


@app.command()
def analyze(
    patient: Annotated[str, typer.Option("--patient", "-p", help="Patient name")] = "",
    entities: Annotated[
        list[str] | None,
        typer.Option("--entity", "-e", help="Entity as text[:CATEGORY]"),
    ] = None,
    entities_file: Annotated[
        Path | None, typer.Option("--entities-file", help="JSON list of entities")
    ] = None,
    reports_file: Annotated[
        Path | None, typer.Option("--reports-file", "-r", help="openFDA JSON to use instead of the API")
    ] = None,
    limit: Annotated[int | None, typer.Option("--limit", help="Reports to fetch")] = None,
    threshold: Annotated[
        float | None, typer.Option("--threshold", help="Maximum normalized match distance")
    ] = None,
    similarity: Annotated[
        str | None, typer.Option("--similarity", help="levenshtein, token_sort or exact")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the JSON payload")] = False,
):
    """Score a list of extracted entities."""
    parsed = [parse_entity(e) for e in entities or []]
    if entities_file:
        parsed.extend(load_entities(entities_file))

    try:
        analyzer = _build_analyzer(reports_file, limit, threshold, similarity)
        result = analyzer.analyze(patient, parsed)
    except TriageError as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(1) from e
    _render(result, as_json)


@app.command("analyze-text")
def analyze_text(
    transcript: Annotated[str, typer.Argument(help="Transcript file, or - for stdin")],
    patient: Annotated[str, typer.Option("--patient", "-p", help="Patient name")] = "",
    extractor: Annotated[
        str, typer.Option("--extractor", "-x", help="lexicon or comprehend")
    ] = "lexicon",
    reports_file: Annotated[
        Path | None, typer.Option("--reports-file", "-r", help="openFDA JSON to use instead of the API")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the JSON payload")] = False,
):
    """Extract entities from a transcript and score them."""
    from ae_triage.sources import ComprehendMedicalExtractor, LexiconExtractor

    text = sys.stdin.read() if transcript == "-" else Path(transcript).read_text(encoding="utf-8")

    if extractor == "lexicon":
        ner = LexiconExtractor()
    elif extractor == "comprehend":
        ner = ComprehendMedicalExtractor()
    else:
        raise typer.BadParameter(f"Unknown extractor: {extractor}")

    try:
        analyzer = _build_analyzer(reports_file)
        result = analyzer.analyze_transcript(patient, text, ner)
    except TriageError as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(1) from e
    _render(result, as_json)


@app.command()
def reports(
    limit: Annotated[int | None, typer.Option("--limit", help="Reports to fetch")] = None,
    reports_file: Annotated[
        Path | None, typer.Option("--reports-file", "-r", help="openFDA JSON to use instead of the API")
    ] = None,
):
    """Show the adverse event reports an analysis would match against."""
    from ae_triage.analysis import ReactionCorpus
    from ae_triage.sources import JsonFileReportSource, OpenFDAEventSource

    source = JsonFileReportSource(reports_file) if reports_file else OpenFDAEventSource.from_settings(settings)
    snapshot = ReactionCorpus(source, limit if limit is not None else settings.fetch_limit).snapshot()

    table = Table(title=f"Adverse event reports ({source.source_key})")
    table.add_column("Report")
    table.add_column("Drug", style="cyan")
    table.add_column("Serious")
    table.add_column("Reactions")
    for report in snapshot:
        table.add_row(
            report.report_id,
            report.drug,
            "[red]yes[/]" if report.serious else "no",
            ", ".join(report.reactions),
        )
    console.print(table)
    console.print(f"[dim]{len(snapshot)} reports[/]")


@app.command()
def vocabulary():
    """List the high-risk condition vocabulary."""
    for term in settings.high_risk_conditions:
        console.print(f"  • {term}")


if __name__ == "__main__":
    app()
