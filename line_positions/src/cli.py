"""
Command-line interface for line-positions.

Looks up line/column positions in files. Offsets are byte offsets unless
--chars is given, in which case the file is decoded and offsets count code
points. Line numbers typed by the user and printed back are 1-indexed.
"""

import click
import codecs
import sys
from pathlib import Path
from typing import Optional, Union

import yaml

from .. import __version__
from ..line_numbers import LineNumber, to_external
from ..utils.logger_setup import LoggerManager, get_logger
from ..utils.report_formatter import format_report
from ..utils.response_schemas import (
    LineRangeReport,
    PositionReport,
    SpanReport,
    SpansReport,
)
from .config import Config, ConfigManager
from .errors import LinePositionsError
from .index import LinePositions, build

logger = get_logger(__name__)


def _fail(message: str):
    click.echo(f"❌ Error: {message}", err=True)
    sys.exit(1)


def _load_text(file_path: str, chars: bool, encoding: str) -> Union[str, bytes]:
    """Read a file as bytes, or as decoded text when counting characters."""
    data = Path(file_path).read_bytes()
    if chars:
        return data.decode(encoding)
    return data


def _line_text(text: Union[str, bytes], start: int, end: int, encoding: str) -> str:
    content = text[start:end]
    if isinstance(content, bytes):
        return content.decode(encoding, errors='replace')
    return content


class QueryContext:
    """Everything a query command needs: the text, its index and output settings."""

    def __init__(self, config: Config, file_path: str, as_json: bool,
                 chars: Optional[bool], encoding: Optional[str], strip_cr: Optional[bool]):
        self.chars = config.output.chars if chars is None else chars
        self.encoding = encoding or config.output.encoding
        self.output_format = 'json' if as_json else config.output.format
        strip = config.index.strip_cr if strip_cr is None else strip_cr
        codecs.lookup(self.encoding)

        self.text = _load_text(file_path, self.chars, self.encoding)
        self.index: LinePositions = build(self.text, strip_cr=strip)
        logger.info(f"Loaded {file_path}: {self.index!r}")

    def line_text(self, line: int) -> str:
        start, end = self.index.line_range(line)
        return _line_text(self.text, start, end, self.encoding)

    def echo(self, report):
        click.echo(format_report(report, self.output_format))


def _either(enable: bool, disable: bool) -> Optional[bool]:
    """Collapse an --x/--no-x flag pair; None when neither was given."""
    if enable and disable:
        raise click.UsageError("Conflicting flags given")
    if enable:
        return True
    if disable:
        return False
    return None


def query_options(func):
    """Options shared by every command that reads a file."""
    func = click.option('--keep-cr', is_flag=True, help='Keep a \\r before \\n in line content')(func)
    func = click.option('--strip-cr', is_flag=True,
                        help='Exclude a \\r before \\n from line content')(func)
    func = click.option('--encoding', default=None, help='Encoding used with --chars')(func)
    func = click.option('--bytes', 'as_bytes', is_flag=True, help='Count offsets in bytes')(func)
    func = click.option('--chars', is_flag=True,
                        help='Count offsets in characters instead of bytes')(func)
    func = click.option('--json', 'as_json', is_flag=True, help='Emit JSON')(func)
    func = click.argument('file_path', type=click.Path(exists=True, dir_okay=False))(func)
    return func


def _open_query(ctx: click.Context, file_path, as_json, chars, as_bytes, encoding,
                strip_cr, keep_cr) -> QueryContext:
    errors = ctx.obj['config_manager'].validate(ctx.obj['config'])
    if errors:
        _fail(f"Invalid configuration: {'; '.join(errors)}")

    try:
        return QueryContext(
            ctx.obj['config'],
            file_path,
            as_json,
            _either(chars, as_bytes),
            encoding,
            _either(strip_cr, keep_cr),
        )
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {file_path}: {e}")
    except LookupError as e:
        _fail(str(e))


@click.group()
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx):
    """line-positions - Map offsets in a file to lines and columns."""
    config_manager = ConfigManager()
    try:
        config = config_manager.load()
    except ValueError as e:
        _fail(f"Invalid configuration: {e}")

    LoggerManager.setup_logging(
        log_file=config.logging.file,
        level=config.logging.level,
        console=True,
    )
    ctx.obj = {'config_manager': config_manager, 'config': config}


@cli.command()
@click.option('--overwrite', is_flag=True, help='Overwrite existing configuration')
@click.pass_context
def init(ctx, overwrite):
    """Initialize configuration in current directory."""
    config_manager = ctx.obj['config_manager']

    if config_manager.init_config(overwrite=overwrite):
        click.echo("✓ Configuration initialized successfully")
        click.echo(f"  Config file: {config_manager.config_file}")
    else:
        click.echo("Configuration already exists. Use --overwrite to replace it.")


@cli.command('config')
@click.pass_context
def show_config(ctx):
    """Show the effective configuration and report problems."""
    config_manager = ctx.obj['config_manager']
    config = ctx.obj['config']

    click.echo(yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False).rstrip())

    errors = config_manager.validate(config)
    if errors:
        click.echo(f"\n⚠️  Configuration problems ({len(errors)}):", err=True)
        for error in errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)


@cli.command()
@query_options
@click.argument('offset', type=int)
@click.pass_context
def locate(ctx, offset, **options):
    """Show the line and column OFFSET falls on.

    Negative offsets need a "--" first, e.g. locate FILE -- -1.
    """
    query = _open_query(ctx, **options)
    try:
        position = query.index.from_offset(offset)
        report = PositionReport.from_position(offset, position, query.line_text(position.line))
    except LinePositionsError as e:
        _fail(str(e))

    query.echo(report)


@cli.command()
@query_options
@click.argument('line', type=int)
@click.pass_context
def line(ctx, line, **options):
    """Show the offsets spanned by LINE (1-indexed)."""
    query = _open_query(ctx, **options)
    line_number = LineNumber.from_display(line)
    try:
        start, end = query.index.line_range(line_number)
    except LinePositionsError as e:
        _fail(str(e))

    report = LineRangeReport(
        line=to_external(line_number),
        start=start,
        end=end,
        line_text=query.line_text(line_number),
    )
    query.echo(report)


@cli.command()
@query_options
@click.argument('start', type=int)
@click.argument('end', type=int)
@click.pass_context
def spans(ctx, start, end, **options):
    """Split the region START..END into one span per line."""
    query = _open_query(ctx, **options)
    try:
        line_spans = query.index.from_offsets(start, end)
    except (LinePositionsError, ValueError) as e:
        _fail(str(e))

    report = SpansReport(
        start=start,
        end=end,
        spans=[SpanReport.from_span(span) for span in line_spans],
    )
    query.echo(report)


@cli.command()
@click.pass_context
def cleanup(ctx):
    """Remove configuration directory (.line-positions)."""
    config_manager = ctx.obj['config_manager']

    if click.confirm("⚠️  This will delete the entire .line-positions directory. Continue?"):
        if config_manager.cleanup():
            click.echo("✓ Cleanup complete")
        else:
            click.echo("✗ Cleanup failed - configuration directory not found")
            click.echo(f"  Directory: {config_manager.config_dir}")
            sys.exit(1)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
