"""Command-line interface for the rsync runner."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console

from . import __version__
from .config.settings import MAX_NUMBER_OF_ARGS, MIN_NUMBER_OF_ARGS, InvocationSettings, RunnerOptions
from .errors import ConfigurationError
from .sync.orchestrator import ERROR_CODE, SUCCESS_CODE, Orchestrator
from .utils.console import ConsolePresenter
from .utils.logging import setup_logging

console = Console()

logger = logging.getLogger(__name__)


# Unknown options are left in place so the tool's own flags (e.g. "-arv --delete")
# arrive as positional arguments.
@click.command(context_settings={"ignore_unknown_options": True})
@click.version_option(version=__version__)
@click.option('--config-file',
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML file with runner options (threshold, delays, exclusions)')
@click.option('--log-level',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              default='INFO',
              help='Logging level')
@click.option('--runner-log',
              type=click.Path(dir_okay=False, path_type=Path),
              help='Write this program\'s own log to a rotating file')
@click.option('--no-pause',
              is_flag=True,
              help='Never wait for a key press (for scheduled or headless runs)')
@click.argument('args', nargs=-1, type=click.UNPROCESSED)
def cli(config_file: Path, log_level: str, runner_log: Path, no_pause: bool, args):
    """Guarded rsync launcher.

    \b
    ARGS, in order:
      SYNC_FROM_PATH  folder that must hold more than ~4 MB
      TOOL_EXE        rsync executable
      TOOL_FLAGS      rsync flags as one argument
      FROM_PATH       rsync source argument
      TO_PATH         rsync destination argument
      [TOOL_LOG CLEAN_LOG]  rsync log to empty, log to collect deletions in
    """
    setup_logging(log_level=log_level, log_file=runner_log)

    try:
        options = RunnerOptions.from_yaml(config_file) if config_file else RunnerOptions()
    except ConfigurationError as e:
        console.print(f"❌ Error: {e}", style="red bold")
        sys.exit(ERROR_CODE)

    presenter = ConsolePresenter(
        console=console,
        pause_on_error=options.pause_on_error and not no_pause,
        window_width=options.window_width,
        window_height=options.window_height,
    )
    presenter.start()

    # Too few arguments is a request for the guide, not an error
    if len(args) < MIN_NUMBER_OF_ARGS:
        presenter.show_help()
        sys.exit(SUCCESS_CODE)

    if len(args) == MIN_NUMBER_OF_ARGS + 1 or len(args) > MAX_NUMBER_OF_ARGS:
        raise click.UsageError(
            f"Expected {MIN_NUMBER_OF_ARGS} or {MAX_NUMBER_OF_ARGS} arguments, got {len(args)}. "
            "The tool log path and the clean log path must be given together."
        )

    try:
        settings = InvocationSettings.from_args(args)
    except ConfigurationError as e:
        presenter.failure(f"❌ Error: {e}")
        sys.exit(ERROR_CODE)

    for name, value in settings.describe().items():
        logger.debug(f"{name}: {value}")
    if log_level.upper() == 'DEBUG':
        presenter.show_settings(settings.describe())

    try:
        status = Orchestrator(settings, options=options, presenter=presenter).run()
    except ConfigurationError as e:
        presenter.failure(f"❌ Error: {e}")
        sys.exit(ERROR_CODE)

    sys.exit(status.exit_code)


if __name__ == '__main__':
    cli()
