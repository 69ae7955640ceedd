"""Console presentation: window state, messages, argument guide and pauses."""

import ctypes
import logging
import subprocess
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

logger = logging.getLogger(__name__)

APP_TITLE = "rsync runner"

# Window state codes for ShowWindow from user32.dll
SW_MINIMIZED = 2
SW_RESTORE = 9

HELP_WINDOW_HEIGHT = 40

EXAMPLE_USAGE = (
    'rsync-runner "D:\\My Music" "C:\\Program Files (x86)\\cwRsync\\bin\\rsync.exe"\n'
    '  "-arv --progress --filter=\'. /cygdrive/d/My Documents/rsync/music-sync_filter.txt\' '
    '--log-file=\'/cygdrive/d/My Documents/rsync/music-sync.log\' --delete-before"\n'
    '  "/cygdrive/d/My Music" "//DS212j/Disk 2/Music/"\n'
    '  "D:\\My Documents\\rsync\\music-sync.log" "D:\\My Documents\\rsync\\music-sync-clean.txt"'
)

ARGUMENTS = [
    ("Required", "1", "Sync from path", "To confirm the folder isn't empty"),
    ("Required", "2", "rsync exe path", "Full path including the executable"),
    ("Required", "3", "rsync flags", "All '-' and '--' flags such as -a and --delete-before"),
    ("Required", "4", "rsync from path", "Path to sync files from (aka origin)"),
    ("Required", "5", "rsync to path", "Path to sync files to (aka destination)"),
    ("Optional", "6", "rsync log file path", "To read all deleted files and clear the log"),
    ("Optional", "7", "Clean log file path", "To write all the deleted files"),
]


class ConsolePresenter:
    """Console window handling and user-facing messages.

    Window operations only do something on Windows; elsewhere they are no-ops
    apart from the title, which rich sets through an escape sequence.
    """

    def __init__(self, console: Console = None, pause_on_error: bool = True,
                 window_width: int = 110, window_height: int = 30):
        self.console = console or Console()
        self.pause_on_error = pause_on_error
        self.window_width = window_width
        self.window_height = window_height
        self.is_windows = sys.platform == 'win32'

    def start(self):
        """Prepare the window for an unattended run."""
        self.set_title(APP_TITLE)
        self.resize(self.window_width, self.window_height)
        self.minimize()

    def set_title(self, title: str):
        if self.is_windows:
            ctypes.windll.kernel32.SetConsoleTitleW(title)
        elif self.console.is_terminal:
            self.console.set_window_title(title)

    def resize(self, width: int, height: int):
        if not self.is_windows:
            return
        # 'mode' clamps to the largest size the display allows
        result = subprocess.run(
            f"mode con: cols={width} lines={height}", shell=True, check=False
        )
        if result.returncode != 0:
            logger.debug(f"Could not resize console window (mode exited {result.returncode})")

    def minimize(self):
        self._show_window(SW_MINIMIZED)

    def restore(self):
        self._show_window(SW_RESTORE)
        self.resize(self.window_width, self.window_height)

    def _show_window(self, state: int):
        if not self.is_windows:
            return
        handle = ctypes.windll.kernel32.GetConsoleWindow()
        if handle:
            ctypes.windll.user32.ShowWindow(handle, state)

    def info(self, message: str):
        self.console.print(message, style="green", markup=False)

    def failure(self, message: str):
        """Bring the window back, show the failure and wait for acknowledgment."""
        self.restore()
        self.console.print(message, style="red bold", markup=False)
        if self.pause_on_error:
            self.pause()

    def pause(self):
        # click.pause returns immediately when stdin isn't a terminal
        click.pause(info="--- Press any key to exit ---")

    def show_settings(self, values: dict):
        table = Table(title="Settings")
        table.add_column("Argument", style="cyan")
        table.add_column("Value")
        for name, value in values.items():
            table.add_row(name, "" if value is None else str(value))
        self.console.print(table)

    def show_help(self):
        """Display the argument guide with a worked example."""
        self.restore()
        self.resize(self.window_width, HELP_WINDOW_HEIGHT)

        table = Table(title="Argument list")
        table.add_column("", style="magenta")
        table.add_column("#", justify="right")
        table.add_column("Argument", style="cyan")
        table.add_column("Purpose")
        for kind, position, name, purpose in ARGUMENTS:
            table.add_row(kind, position, name, purpose)

        self.console.print(table)
        self.console.print(
            "Both 6 & 7 must be used together, in addition to the rsync --log-file flag.\n"
        )
        self.console.print(Panel(Text(EXAMPLE_USAGE), title="Example usage (spacing for clarity)",
                                 expand=False))
        self.console.print(
            "\nThe 'Sync from path' is used to check that the folder being synced is more "
            "than ~4 MB, to prevent accidental deletion of destination files. The log file "
            "paths are used to find every item that was deleted, clear the rsync log, and "
            "write the deleted items into the clean log for easier reading.\n"
            "The program exits by itself if no errors occur. Otherwise it stays open with an "
            "error message until you press any key."
        )
        if self.pause_on_error:
            self.pause()
