import logging
from pathlib import Path
from typing import IO

import click
from pydantic import BaseModel

from artex.application.config_loader import load_config
from artex.application.config_models import ArtexConfig
from artex.application.extraction_orchestrator import ExtractionOrchestrator
from artex.domain.models.extraction_outcome import ExtractionOutcome
from artex.interface.cli.output_models import DetectOutput, ExtractOutput, ExtractorsOutput

logger = logging.getLogger(__name__)

# Exit code when extraction ran but produced no valid artifact.
EXIT_NOTHING_FOUND = 2


def _json_emit(model: BaseModel) -> None:
    # Single-line JSON, omit None fields (e.g., ExtractOutput.extractor when not forced).
    click.echo(model.model_dump_json(exclude_none=True), nl=True)


def _get_json_mode(ctx: click.Context) -> bool:
    obj = ctx.obj or {}
    return bool(obj.get("json", False))


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_orchestrator(ctx: click.Context) -> ExtractionOrchestrator:
    """Load layered config, apply logging settings and build the orchestrator."""
    cfg = ArtexConfig.from_mapping(load_config(project_root=Path.cwd(), user_home=Path.home()))

    obj = ctx.obj or {}
    _configure_logging(obj.get("log_level") or cfg.log_level)
    logger.debug(f"Configured extractors: {cfg.extractors}")

    return ExtractionOrchestrator.from_config(cfg)


def _read_source(source: IO[str]) -> str:
    return source.read()


def _extract_output(outcome: ExtractionOutcome, exit_code: int, extractor: str | None) -> ExtractOutput:
    return ExtractOutput(
        exit_code=exit_code,
        extractor=extractor,
        succeeded=outcome.succeeded,
        valid_count=outcome.valid_count,
        invalid_count=outcome.invalid_count,
        artifacts=list(outcome.all_artifacts),
        by_producer={producer: len(found) for producer, found in outcome.by_producer.items()},
        errors=dict(outcome.errors),
    )


@click.group(help="Extract code artifacts from AI assistant responses.")
@click.option("--json", "json_output", is_flag=True, help="Emit machine-readable JSON on stdout.")
@click.option(
    "--log-level",
    "log_level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (overrides config).",
)
@click.pass_context
def cli(ctx: click.Context, json_output: bool, log_level: str | None) -> None:
    ctx.ensure_object(dict)
    ctx.obj["json"] = bool(json_output)
    ctx.obj["log_level"] = log_level


@cli.command("extract")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--extractor",
    "extractor_id",
    type=str,
    default=None,
    help="Force a single extractor by id (skips its applicability check).",
)
@click.option("--show-content", is_flag=True, help="Print artifact content in text mode.")
@click.pass_context
def extract_cmd(ctx: click.Context, source: IO[str], extractor_id: str | None, show_content: bool) -> None:
    """Extract artifacts from SOURCE (a file, or '-' for stdin)."""
    try:
        orchestrator = _build_orchestrator(ctx)
        text = _read_source(source)

        if extractor_id:
            outcome = orchestrator.extract_with(text, extractor_id)
        else:
            outcome = orchestrator.extract_all(text)

        exit_code = 0 if outcome.valid_count > 0 else EXIT_NOTHING_FOUND
        if outcome.has_errors and outcome.valid_count == 0:
            exit_code = 1

        if _get_json_mode(ctx):
            _json_emit(_extract_output(outcome, exit_code, extractor_id))
            raise click.exceptions.Exit(exit_code)

        for artifact in outcome.all_artifacts:
            if artifact.valid:
                click.echo(f"[OK] {artifact.producer} {artifact.kind} {artifact.path}")
                if show_content:
                    click.echo(artifact.content)
            else:
                click.echo(
                    f"[INVALID] {artifact.producer} {artifact.path or '<no path>'}: {artifact.error}"
                )

        click.echo(outcome.summary(), nl=False)

        if exit_code == 1:
            raise click.ClickException("; ".join(outcome.errors.values()))
        if exit_code != 0:
            raise click.exceptions.Exit(exit_code)

    except (click.exceptions.Exit, click.ClickException):
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(ExtractOutput(exit_code=1, extractor=extractor_id, error=str(e)))
            raise click.exceptions.Exit(1)
        raise click.ClickException(str(e)) from e


@cli.command("detect")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.pass_context
def detect_cmd(ctx: click.Context, source: IO[str]) -> None:
    """List the extractors that would claim SOURCE."""
    try:
        orchestrator = _build_orchestrator(ctx)
        applicable = orchestrator.detect_applicable(_read_source(source))
        ambiguous = len(applicable) > 1

        if _get_json_mode(ctx):
            _json_emit(DetectOutput(exit_code=0, applicable=applicable, ambiguous=ambiguous))
            raise click.exceptions.Exit(0)

        if not applicable:
            click.echo("No applicable extractors.")
            return

        for producer in applicable:
            click.echo(producer)
        if ambiguous:
            click.echo(
                f"note: {len(applicable)} extractors claim this content", err=True
            )

    except click.exceptions.Exit:
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(DetectOutput(exit_code=1, error=str(e)))
            raise click.exceptions.Exit(1)
        raise click.ClickException(str(e)) from e


@cli.command("extractors")
@click.pass_context
def extractors_cmd(ctx: click.Context) -> None:
    """List configured extractors."""
    try:
        descriptions = _build_orchestrator(ctx).describe_extractors()

        if _get_json_mode(ctx):
            _json_emit(ExtractorsOutput(exit_code=0, extractors=descriptions))
            raise click.exceptions.Exit(0)

        click.echo(f"{'EXTRACTOR':<18}{'SUFFIXES':<24}{'IMPLEMENTATION'}")
        for d in descriptions:
            click.echo(f"{d.producer_id:<18}{', '.join(d.suffixes):<24}{d.implementation_name}")

    except click.exceptions.Exit:
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(ExtractorsOutput(exit_code=1, error=str(e)))
            raise click.exceptions.Exit(1)
        raise click.ClickException(str(e)) from e
