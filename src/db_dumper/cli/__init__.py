"""CLI for running configured backup jobs.

Jobs are read from dumper.toml (``--config`` or ``DB_DUMPER_CONFIG``).

Usage:
    db-dumper jobs
    db-dumper command shop
    db-dumper command shop --restore --path backups/shop.sql
    db-dumper dump shop --credential-file /run/secrets/my.cnf
    db-dumper restore shop --input backups/shop.sql --yes

Commands:
    jobs      - List configured jobs
    command   - Print the dump (or restore) command without running it
    dump      - Dump a job's database
    restore   - Restore a job's database from a dump file
"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from db_dumper.config.loader import load_dumper_config
from db_dumper.config.models import DumperConfig
from db_dumper.dumper import Dumper
from db_dumper.exceptions import ConfigurationError, DumperError

console = Console()


# ============================================================================
# Helpers
# ============================================================================


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config(args: argparse.Namespace) -> DumperConfig:
    config_path = Path(args.config) if args.config else None
    return load_dumper_config(config_path)


def _resolve_dumper(args: argparse.Namespace) -> tuple[str, Dumper]:
    """Load the config and build the dumper for the requested (or default) job.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigurationError: If the job is unknown or invalid.
    """
    config = _load_config(args)
    name = args.job or config.default_job
    if not name:
        raise ConfigurationError(
            "No job given and no default_job configured. "
            f"Available jobs: {', '.join(config.jobs) or '(none)'}"
        )
    if name not in config.jobs:
        raise ConfigurationError(
            f"Job '{name}' not found. Available: {', '.join(config.jobs) or '(none)'}"
        )
    return name, Dumper(config.jobs[name])


# ============================================================================
# Command implementations
# ============================================================================


def cmd_jobs(args: argparse.Namespace) -> int:
    """List jobs from dumper.toml.

    Returns:
        0 on success, 1 if the config is missing or invalid.
    """
    try:
        config = _load_config(args)
    except (FileNotFoundError, DumperError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    if not config.jobs:
        console.print("[yellow]No jobs configured.[/yellow]")
        return 0

    table = Table(title="Backup Jobs", show_header=True, header_style="bold")
    table.add_column("", width=2)
    table.add_column("Job")
    table.add_column("Engine")
    table.add_column("Database")
    table.add_column("Destination")

    for name, job in config.jobs.items():
        is_default = name == config.default_job
        table.add_row(
            "[bold green]*[/bold green]" if is_default else " ",
            f"[bold cyan]{name}[/bold cyan]" if is_default else name,
            job.engine.value,
            job.db_name or "[dim](all)[/dim]",
            job.destination_path or "[dim]-[/dim]",
        )

    console.print(table)

    if config.default_job:
        console.print("\n[bold green]*[/bold green] = default job")

    return 0


def cmd_command(args: argparse.Namespace) -> int:
    """Print the assembled command for a job without running it.

    Returns:
        0 on success, 1 on configuration errors.
    """
    try:
        _, dumper = _resolve_dumper(args)
    except (FileNotFoundError, DumperError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    if args.restore:
        command = dumper.get_restore_command(args.credential_file, args.path)
    else:
        command = dumper.get_dump_command(args.credential_file, args.path)

    # plain print: no line wrapping or markup
    print(command)
    return 0


def cmd_dump(args: argparse.Namespace) -> int:
    """Dump a job's database.

    Returns:
        0 on success, 1 on failure.
    """
    try:
        name, dumper = _resolve_dumper(args)
        console.print(f"Dumping job [bold cyan]{name}[/bold cyan]...", style="dim")
        output = dumper.dump(args.credential_file, args.output)
    except (FileNotFoundError, DumperError) as e:
        console.print(f"[bold red]x[/bold red] Dump failed: {e}")
        return 1

    console.print(f"[bold green]v[/bold green] Dump written to [bold]{output}[/bold]")
    return 0


def cmd_restore(args: argparse.Namespace) -> int:
    """Restore a job's database from a dump file.

    Asks for confirmation unless ``--yes`` is given.

    Returns:
        0 on success or cancel, 1 on failure.
    """
    try:
        name, dumper = _resolve_dumper(args)
    except (FileNotFoundError, DumperError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    file_path = args.input or dumper.config.restore_path

    if not args.yes:
        console.print(
            f"[yellow]This will restore[/yellow] [bold]{dumper.config.db_name or '(all)'}[/bold] "
            f"[yellow]from[/yellow] {file_path or '(no file)'}"
        )
        response = input("Continue? [y/N] ")
        if response.lower() not in ["y", "yes"]:
            console.print("Cancelled.")
            return 0

    try:
        dumper.restore(args.credential_file, file_path)
    except (FileNotFoundError, DumperError) as e:
        console.print(f"[bold red]x[/bold red] Restore failed: {e}")
        return 1

    console.print(f"[bold green]v[/bold green] Restored job [bold cyan]{name}[/bold cyan]")
    return 0


# ============================================================================
# Main entry point
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="db-dumper",
        description="Build and run database dump/restore commands",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Path to dumper.toml (default: $DB_DUMPER_CONFIG or ./dumper.toml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug with commands)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # jobs command
    p_jobs = subparsers.add_parser("jobs", help="List configured jobs")
    p_jobs.set_defaults(func=cmd_jobs)

    # command command
    p_command = subparsers.add_parser(
        "command",
        help="Print the dump or restore command without running it",
    )
    p_command.add_argument("job", nargs="?", help="Job name (default: default_job)")
    p_command.add_argument(
        "--restore",
        action="store_true",
        help="Print the restore command instead of the dump command",
    )
    p_command.add_argument("--credential-file", default="", help="Credentials file")
    p_command.add_argument(
        "--path",
        default="",
        help="Dump destination, or restore input with --restore",
    )
    p_command.set_defaults(func=cmd_command)

    # dump command
    p_dump = subparsers.add_parser("dump", help="Dump a job's database")
    p_dump.add_argument("job", nargs="?", help="Job name (default: default_job)")
    p_dump.add_argument("--credential-file", default="", help="Credentials file")
    p_dump.add_argument(
        "--output",
        "-o",
        default="",
        help="Output file (default: the job's destination_path)",
    )
    p_dump.set_defaults(func=cmd_dump)

    # restore command
    p_restore = subparsers.add_parser("restore", help="Restore a job's database")
    p_restore.add_argument("job", nargs="?", help="Job name (default: default_job)")
    p_restore.add_argument("--credential-file", default="", help="Credentials file")
    p_restore.add_argument(
        "--input",
        "-i",
        default="",
        help="Dump file to restore (default: the job's restore_path)",
    )
    p_restore.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Skip confirmation prompt",
    )
    p_restore.set_defaults(func=cmd_restore)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
