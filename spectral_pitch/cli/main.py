"""Main entry point for the spectral-pitch CLI."""

import sys

import click

from ..core.config import ConfigManager
from ..core.factory import ComponentFactory
from ..detection.note_table import (
    NAMED_TABLES,
    cents_offset,
    classify_note,
    resolve_note_table,
)
from ..detection.peak import SELECTION_KEYS
from ..errors import InvalidInput
from ..logging_config import get_logger, setup_logging
from ..note_types import DetectionResult

logger = get_logger(__name__)


def format_result(result: DetectionResult) -> str:
    return (
        f"{result.timestamp:8.3f}s  {result.frequency_hz:9.2f} Hz  "
        f"mag {result.magnitude:10.3f}  {result.note or '---'}"
    )


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Configuration directory (default ~/.config/spectral_pitch)",
)
@click.pass_context
def cli(ctx, debug, config_dir):
    """Spectral pitch detection: FFT peak estimation and note lookup"""
    setup_logging("DEBUG" if debug else None)
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--block-size", "-b", type=int, default=None, help="Samples per block (power of two)")
@click.option("--threshold", type=float, default=None, help="Note match threshold in Hz")
@click.option("--table", type=click.Choice(sorted(NAMED_TABLES)), default=None, help="Note table")
@click.option(
    "--selection", type=click.Choice(sorted(SELECTION_KEYS)), default=None, help="Peak ranking key"
)
@click.option("--max-blocks", type=int, default=None, help="Stop after this many blocks")
@click.pass_context
def analyze(ctx, path, block_size, threshold, table, selection, max_blocks):
    """Print the dominant pitch and note of every block in an audio file"""
    factory = ComponentFactory(ConfigManager(ctx.obj["config_dir"]))
    logger.info(f"Analyzing {path}")

    overrides = {}
    if threshold is not None:
        overrides["threshold_hz"] = threshold
    if table is not None:
        overrides["note_table"] = table
    if selection is not None:
        overrides["selection"] = selection

    try:
        source_kwargs = {"block_size": block_size} if block_size is not None else {}
        source = factory.create_block_source(path, **source_kwargs)
        service = factory.create_detection_service(source, **overrides)
        service.on_result(lambda result: click.echo(format_result(result)))
        results = service.run(max_blocks=max_blocks)
    except InvalidInput as e:
        raise click.ClickException(str(e))

    notes = [r.note for r in results if r.note]
    click.echo(f"{len(results)} block(s) analyzed, {len(notes)} matched a note")


@cli.command()
@click.argument("frequency", type=float)
@click.option("--threshold", type=float, default=None, help="Note match threshold in Hz")
@click.option("--table", type=click.Choice(sorted(NAMED_TABLES)), default=None, help="Note table")
@click.option("--flats", is_flag=True, help="Use flat note names in the chromatic table")
@click.pass_context
def classify(ctx, frequency, threshold, table, flats):
    """Print the note closest to FREQUENCY (Hz)"""
    config = ConfigManager(ctx.obj["config_dir"]).get_config("pitch_detector")
    try:
        note_table = resolve_note_table(
            table or config["note_table"], flats or config["use_flats"]
        )
    except InvalidInput as e:
        raise click.ClickException(str(e))

    note = classify_note(
        frequency, note_table, threshold if threshold is not None else config["threshold_hz"]
    )
    if note is None:
        click.echo("no match")
        ctx.exit(1)

    reference = next(entry.frequency for entry in note_table if entry.name == note)
    click.echo(f"{note} ({cents_offset(frequency, reference):+.1f} cents)")


def main() -> int:
    return cli(obj={})


if __name__ == "__main__":
    sys.exit(main())
