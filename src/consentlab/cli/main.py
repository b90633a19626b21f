"""CLI for consentlab: analyze / translate / ask / report / languages / serve."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from consentlab.core.config import AppSettings, LLMConfig
from consentlab.core.exceptions import ExtractionError
from consentlab.core.types import Outcome
from consentlab.languages import SUPPORTED_LANGUAGES
from consentlab.models import DocumentOrigin, RiskLevel
from consentlab.services.pipeline import ConsentPipeline
from consentlab.services.text_source import ImageSource, PdfSource, TextSource

app = typer.Typer(name="consentlab", help="Consent form analysis, translation and Q&A")
console = Console()

_IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".bmp", ".tif", ".tiff"}
_RISK_STYLES = {RiskLevel.LOW: "green", RiskLevel.MEDIUM: "yellow", RiskLevel.HIGH: "red"}


def _build_settings(model: Optional[str], api_key: Optional[str]) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    settings = AppSettings()
    overrides: dict = {}
    if model:
        overrides["model"] = model
    if api_key:
        overrides["api_key"] = api_key
    if overrides:
        settings.llm = LLMConfig(**{**settings.llm.model_dump(), **overrides})
    return settings


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


def _load_source(path: Path) -> TextSource | str:
    """Map a file to a text source by suffix; anything else is read as text."""
    if not path.exists():
        raise typer.BadParameter(f"File not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return PdfSource(data=path.read_bytes(), filename=path.name)
    if suffix in _IMAGE_SUFFIXES:
        return ImageSource(data=path.read_bytes(), origin=DocumentOrigin.SCAN)
    return path.read_text(encoding="utf-8")


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)


@app.command()
def analyze(
    file: Path = typer.Argument(..., help="Consent form (.pdf, image, or text file)"),
    as_json: bool = typer.Option(False, "--json", help="Print the assessment as JSON"),
    model: Optional[str] = typer.Option(None, "--model", help="LiteLLM model id"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Provider API key"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Summarize a consent form and classify its risk."""
    _configure_logging(verbose)
    pipeline = ConsentPipeline.from_settings(_build_settings(model, api_key))
    source = _load_source(file)

    async def _run():
        if isinstance(source, str):
            return await pipeline.analyze_text(source)
        return await pipeline.process_document(source)

    outcome = asyncio.run(_run())
    if not outcome.ok:
        _fail(outcome.error.message)

    assessment = outcome.value.assessment
    if as_json:
        console.print_json(assessment.model_dump_json())
        return

    style = _RISK_STYLES[assessment.risk_level]
    console.print(Panel(assessment.summary, title="Summary"))
    console.print(f"Risk level: [bold {style}]{assessment.risk_level.value.upper()}[/bold {style}]")
    for factor in assessment.risk_factors:
        console.print(f"  • {factor}")
    if not assessment.has_risk_factors:
        console.print("[yellow]No risk factors were reported.[/yellow]")


@app.command()
def translate(
    text: str = typer.Argument(..., help="Summary text to translate"),
    language: str = typer.Option(..., "--language", "-l", help="Target language name or code"),
    model: Optional[str] = typer.Option(None, "--model"),
    api_key: Optional[str] = typer.Option(None, "--api-key"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Translate a consent summary."""
    _configure_logging(verbose)
    pipeline = ConsentPipeline.from_settings(_build_settings(model, api_key))
    outcome = asyncio.run(pipeline.translate_summary(text, language))
    if not outcome.ok:
        _fail(outcome.error.message)
    console.print(outcome.value)


@app.command()
def ask(
    file: Path = typer.Argument(..., help="Consent form (.pdf, image, or text file)"),
    question: str = typer.Argument(..., help="Question about the consent form"),
    language: str = typer.Option("English", "--language", "-l"),
    model: Optional[str] = typer.Option(None, "--model"),
    api_key: Optional[str] = typer.Option(None, "--api-key"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Ask a question answered only from the consent form."""
    _configure_logging(verbose)
    pipeline = ConsentPipeline.from_settings(_build_settings(model, api_key))
    source = _load_source(file)

    async def _run() -> Outcome[str]:
        if isinstance(source, str):
            document_text = source
        else:
            try:
                document_text = (await pipeline.sources.extract(source)).content
            except ExtractionError as e:
                return Outcome.failure(e)
        return await pipeline.ask(question, document_text, language)

    outcome = asyncio.run(_run())
    if not outcome.ok:
        _fail(outcome.error.message)
    console.print(outcome.value)


@app.command()
def report(
    file: Path = typer.Argument(..., help="Medical report (.pdf, image, or text file)"),
    model: Optional[str] = typer.Option(None, "--model"),
    api_key: Optional[str] = typer.Option(None, "--api-key"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Extract patient registration details from a medical report."""
    _configure_logging(verbose)
    pipeline = ConsentPipeline.from_settings(_build_settings(model, api_key))
    outcome = asyncio.run(pipeline.extract_patient_details(_load_source(file)))
    if not outcome.ok:
        _fail(outcome.error.message)
    console.print_json(json.dumps(outcome.value.as_form_fields()))


@app.command()
def languages() -> None:
    """List supported output languages."""
    table = Table(title="Supported languages")
    table.add_column("Code")
    table.add_column("Language")
    for lang in SUPPORTED_LANGUAGES:
        table.add_row(lang.code, lang.label)
    console.print(table)


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Port (defaults to CONSENTLAB_API_PORT)"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("consentlab.api.app:app", host=host, port=port or AppSettings().api.port)


if __name__ == "__main__":
    app()
