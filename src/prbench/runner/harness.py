import enum
import logging
import subprocess  # nosec B404
import time
from dataclasses import dataclass
from pathlib import Path

from ..config import CRITERION_BENCH, IAI_BENCH, TARGET_PACKAGE
from ..errors import HarnessError

logger = logging.getLogger(__name__)

# Exit status reported when the harness executable cannot be started
_NOT_STARTED_RETURNCODE = 127


class Harness(str, enum.Enum):
    COUNTER = "iai"
    STATISTICAL = "criterion"


@dataclass(frozen=True)
class HarnessSpec:
    harness: Harness
    argv: tuple[str, ...]
    output_file: str
    merge_stderr: bool = False


@dataclass(frozen=True)
class BenchmarkInvocation:
    harness: Harness
    argv: tuple[str, ...]
    output: str
    returncode: int
    duration_s: float = 0.0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def counter_spec(package: str = TARGET_PACKAGE, bench: str = IAI_BENCH) -> HarnessSpec:
    return HarnessSpec(
        harness=Harness.COUNTER,
        argv=("cargo", "bench", "-p", package, "--bench", bench),
        output_file="iai_bench",
    )


def statistical_spec(package: str = TARGET_PACKAGE, bench: str = CRITERION_BENCH) -> HarnessSpec:
    return HarnessSpec(
        harness=Harness.STATISTICAL,
        argv=("cargo", "criterion", "-p", package, "--bench", bench, "--color", "never"),
        output_file="criterion_bench",
        merge_stderr=True,
    )


def run_harness(spec: HarnessSpec, *, cwd: Path | None, workdir: Path) -> BenchmarkInvocation:
    """Run one benchmark harness to completion and stage its output.

    The captured text is written to ``workdir / spec.output_file`` and echoed to
    the log. No timeout is applied.

    Raises:
        HarnessError: The harness could not be started or exited non-zero.
    """
    logger.info("Running %s harness: %s", spec.harness.value, " ".join(spec.argv))
    started_at = time.monotonic()
    try:
        completed = subprocess.run(  # nosec B603
            list(spec.argv),
            cwd=cwd,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if spec.merge_stderr else None,
        )
        # bytes in, decoded once: no newline translation
        output = (completed.stdout or b"").decode("utf-8", errors="replace")
        returncode = completed.returncode
    except OSError as exc:
        output = str(exc)
        returncode = _NOT_STARTED_RETURNCODE
    duration_s = time.monotonic() - started_at

    invocation = BenchmarkInvocation(
        harness=spec.harness,
        argv=spec.argv,
        output=output,
        returncode=returncode,
        duration_s=duration_s,
    )

    workdir.mkdir(parents=True, exist_ok=True)
    (workdir / spec.output_file).write_text(output, encoding="utf-8", newline="")
    logger.info("%s output (%.1fs):\n%s", spec.harness.value, duration_s, output)

    if not invocation.ok:
        logger.error("%s harness exited with code %d", spec.harness.value, returncode)
        raise HarnessError(invocation)
    return invocation
