import click
import os
from colorama import Fore, Style
from .. import cli_logger

LEVEL_COLORS = {
    "[WARNING]": Fore.YELLOW,
    "[ERROR]": Fore.RED,
    "[TRACEBACK]": Fore.RED,
    "[DEBUG]": Fore.WHITE + Style.DIM,
    "[SUCCESS]": Fore.GREEN,
    "[INFO]": Fore.CYAN,
}


def _line_color(line):
    for marker, color in LEVEL_COLORS.items():
        if marker in line:
            return color
    return Fore.CYAN


@click.command()
@click.option('--filename', default=None, help='The name of the log file to display.')
@click.option('--list', 'list_files', is_flag=True, help='List all log files.')
@click.option('--level', default=None, type=click.Choice(['info', 'success', 'warning', 'error', 'debug', 'traceback']),
              help='Only show lines of this level.')
def log(filename, list_files, level):
    """Display a specific log file or the latest log file, or list all log files."""
    log_dir = cli_logger.LOG_DIR
    if list_files:
        log_files = [f for f in os.listdir(log_dir) if f.endswith(".log")] if os.path.exists(log_dir) else []
        if not log_files:
            click.echo("No log files found.")
            return
        click.echo("Available log files:")
        for f in sorted(log_files):
            click.echo(f"  {f}")
        return

    if filename:
        log_file = os.path.join(log_dir, filename)
    else:
        log_file = cli_logger.get_latest_log_file()

    if not log_file or not os.path.exists(log_file):
        click.echo("No log files found.")
        return

    marker = f"[{level.upper()}]" if level else None
    click.echo(f"Displaying log file: {log_file}")
    try:
        with open(log_file, 'r') as f:
            for line in f:
                if marker and marker not in line:
                    continue
                click.echo(f"{_line_color(line)}{line.strip()}{Style.RESET_ALL}")
    except IOError as e:
        click.echo(f"Error reading log file {log_file}: {e}", err=True)
        click.echo("Please check file permissions.")
