"""CLI interface for stopwatch."""

import os
import subprocess
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .clock import IS_HIGH_RESOLUTION, SYSTEM_CLOCK, TICKS_PER_SECOND
from .core import TICKS_PER_MILLISECOND, Stopwatch
from .utils.logging import log_measurement, setup_logger

app = typer.Typer(help="Measure elapsed time with a monotonic stopwatch")
console = Console()


def main():
    """Entry point for CLI."""
    app()


@app.command()
def run(
    command: List[str] = typer.Argument(
        ...,
        help="Shell command to time (use -- before commands with options)"
    ),
    repeat: int = typer.Option(
        1,
        "--repeat", "-n",
        help="Number of times to run the command"
    ),
    log_path: Optional[Path] = typer.Option(
        None,
        "--log-path",
        help="Directory for JSONL measurement logs (default: $STOPWATCH_LOG_DIR)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Print logs to terminal for debugging"
    ),
):
    """Run a shell command and report how long it took."""

    if repeat < 1:
        console.print(f"❌ --repeat must be at least 1, got {repeat}", style="red")
        raise typer.Exit(2)

    # Use STOPWATCH_LOG_DIR if set and no --log-path given
    if log_path is None and os.getenv("STOPWATCH_LOG_DIR"):
        log_path = Path(os.getenv("STOPWATCH_LOG_DIR"))

    if log_path is not None and log_path.exists() and not log_path.is_dir():
        console.print(f"❌ Log path is not a directory: {log_path}", style="red")
        raise typer.Exit(1)

    command_line = " ".join(command)

    try:
        logger = setup_logger(log_path, verbose=verbose)

        console.print(f"⏱️  Timing: {command_line}", style="bold blue")
        console.print(f"Runs: {repeat}")
        console.print()

        results = []
        total = Stopwatch()
        for i in range(repeat):
            watch = Stopwatch.start_new()
            total.start()
            completed = subprocess.run(command_line, shell=True)
            total.stop()
            watch.stop()

            result = {
                "run": i + 1,
                "command": command_line,
                "exit_code": completed.returncode,
                "elapsed_seconds": watch.elapsed_seconds,
                "elapsed_ms": watch.elapsed_milliseconds,
                "elapsed_ticks": watch.elapsed_ticks,
            }
            results.append(result)
            log_measurement(logger, result)

        _display_results(results, total)

    except KeyboardInterrupt:
        console.print("\n❌ Timing interrupted", style="red")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"❌ Error: {e}", style="red")
        raise typer.Exit(1)

    if log_path is not None:
        console.print(f"📝 Measurements saved to: {log_path}", style="dim")

    # Report the first failure, like a shell would for a sequence of runs
    for result in results:
        if result["exit_code"] != 0:
            raise typer.Exit(_exit_status(result["exit_code"]))


def _exit_status(returncode: int) -> int:
    """Map a child return code to a process exit status.

    Children killed by a signal report -signum; shells exit with 128 + signum.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def _display_results(results: List[dict], total: Stopwatch):
    """Display timing results."""
    console.print("📊 Timing Results", style="bold green")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Run", style="cyan")
    table.add_column("Seconds", style="white")
    table.add_column("Milliseconds", style="white")
    table.add_column("Exit Code", style="white")

    for result in results:
        exit_style = "green" if result["exit_code"] == 0 else "red"
        table.add_row(
            str(result["run"]),
            f"{result['elapsed_seconds']:.6f}",
            str(result["elapsed_ms"]),
            f"[{exit_style}]{result['exit_code']}[/{exit_style}]",
        )

    if len(results) > 1:
        mean_ticks = total.elapsed_ticks // len(results)
        table.add_row("Total", f"{total.elapsed_seconds:.6f}", str(total.elapsed_milliseconds), "")
        table.add_row(
            "Mean",
            f"{mean_ticks / TICKS_PER_SECOND:.6f}",
            str(mean_ticks // TICKS_PER_MILLISECOND),
            "",
        )

    console.print(table)
    console.print()


@app.command()
def info():
    """Show properties of the system monotonic clock."""
    details = SYSTEM_CLOCK.describe()

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Clock", details["name"])
    table.add_row("Implementation", str(details["implementation"]))
    table.add_row("Frequency", f"{details['frequency']} ticks/sec")
    table.add_row("Tick Scale", str(details["tick_scale"]))
    table.add_row("Resolution", f"{details['resolution_sec']:.3e} sec")
    table.add_row("Monotonic", str(details["monotonic"]))
    table.add_row("High Resolution", str(IS_HIGH_RESOLUTION))

    console.print(table)


if __name__ == "__main__":
    main()
