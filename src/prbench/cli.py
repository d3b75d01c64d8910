import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

import click
from dotenv import load_dotenv

from .config import LOG_FORMAT, PipelineConfig, get_log_level
from .errors import PipelineError
from .events import TriggerEvent, load_event
from .pipeline import Pipeline, PipelineState
from .report import compose_report

logger = logging.getLogger(__name__)


def _load_dotenv() -> None:
    dotenv_path = os.getenv("PRBENCH_DOTENV_PATH", "").strip()
    if dotenv_path:
        path = Path(dotenv_path).expanduser()
        if path.exists():
            load_dotenv(path)
            return
        click.echo(f"Warning: PRBENCH_DOTENV_PATH does not exist: {dotenv_path}", err=True)
    load_dotenv()


def _setup_logging(verbose: bool) -> None:
    log_level_str = "DEBUG" if verbose else get_log_level()
    logging.basicConfig(
        level=getattr(logging, log_level_str, logging.INFO),
        format=LOG_FORMAT,
    )


def _resolve_event(
    event_path: str | None,
    label: str | None,
    number: int | None,
    repository: str | None,
) -> TriggerEvent:
    if label is not None or number is not None or repository is not None:
        if label is None or number is None or repository is None:
            raise click.UsageError("--label, --number and --repository must be given together")
        owner, sep, repo = repository.partition("/")
        if not sep or not owner or not repo:
            raise click.UsageError(f"--repository must be OWNER/NAME, got {repository!r}")
        return TriggerEvent(label=label, number=number, owner=owner, repo=repo)

    if not event_path:
        raise click.UsageError("no event: pass --event-path (or set GITHUB_EVENT_PATH)")
    return load_event(event_path)


def _read_output(path: Path) -> str:
    return path.read_bytes().decode("utf-8", errors="replace")


@click.group()
def main() -> None:
    """Run PR benchmarks and post the results as a comment."""


@main.command()
@click.option(
    "--event-path",
    envvar="GITHUB_EVENT_PATH",
    default=None,
    help="Webhook payload JSON (default: $GITHUB_EVENT_PATH)",
)
@click.option("--label", default=None, help="Label name (instead of --event-path)")
@click.option("--number", type=int, default=None, help="Pull request number")
@click.option("--repository", default=None, help="OWNER/NAME of the repository")
@click.option(
    "--cwd",
    "checkout_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project checkout to benchmark (default: current directory)",
)
@click.option(
    "--workdir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for captured harness output (default: temporary, removed after the run)",
)
@click.option("--skip-provision", is_flag=True, help="Do not install tools; only check PATH")
@click.option("--dry-run", is_flag=True, help="Print the report instead of publishing it")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def run(
    event_path: str | None,
    label: str | None,
    number: int | None,
    repository: str | None,
    checkout_dir: Path | None,
    workdir: Path | None,
    skip_provision: bool,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Benchmark a pull request when the marker label is added."""
    _load_dotenv()
    _setup_logging(verbose)

    try:
        event = _resolve_event(event_path, label, number, repository)
        config = PipelineConfig.from_env()
    except (PipelineError, RuntimeError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if skip_provision and not config.skip_provision:
        config = replace(config, skip_provision=True)

    pipeline = Pipeline(config, cwd=checkout_dir, workdir=workdir, dry_run=dry_run)
    try:
        result = pipeline.run(event)
    except PipelineError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if result.state is PipelineState.GATED_OUT:
        click.echo(f"Label {event.label!r} is not {config.marker_label!r}; nothing to do.")
        return

    if dry_run and result.message is not None:
        click.echo(result.message.body)
        return

    if result.comment is not None:
        click.echo(f"Posted benchmark report: {result.comment.html_url}")


@main.command()
@click.argument("counter_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("statistical_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--max-chars", type=click.IntRange(min=1), default=None, help="Cap each output")
def compose(counter_file: Path, statistical_file: Path, max_chars: int | None) -> None:
    """Print the report for previously captured iai and criterion output."""
    message = compose_report(
        _read_output(counter_file),
        _read_output(statistical_file),
        max_chars=max_chars,
    )
    click.echo(message.body)


if __name__ == "__main__":
    main()
