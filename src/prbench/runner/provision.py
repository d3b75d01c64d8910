import logging
import shutil
import subprocess  # nosec B404
from typing import Any

from ..errors import ProvisioningError

logger = logging.getLogger(__name__)

# valgrind backs iai; cargo-criterion runs criterion; ocaml is needed by ocaml-gen at build time
DEFAULT_PROVISION_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("sudo", "apt-get", "install", "-y", "valgrind"),
    ("cargo", "install", "cargo-criterion"),
    ("sudo", "apt-get", "update"),
    ("sudo", "apt-get", "install", "-y", "ocaml"),
)

REQUIRED_TOOLS: tuple[str, ...] = ("cargo", "valgrind", "cargo-criterion")

_STDERR_TAIL_CHARS = 2000


def _run_step(cmd: tuple[str, ...]) -> None:
    logger.info("Provisioning: %s", " ".join(cmd))
    try:
        completed = subprocess.run(  # nosec B603
            list(cmd),
            check=False,
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        raise ProvisioningError(f"{' '.join(cmd)} failed: {exc}") from exc
    if completed.returncode == 0:
        return
    stderr = (completed.stderr or completed.stdout or "").strip()[-_STDERR_TAIL_CHARS:]
    details = f": {stderr}" if stderr else ""
    raise ProvisioningError(f"{' '.join(cmd)} failed (code {completed.returncode}){details}")


def provision(commands: tuple[tuple[str, ...], ...] = DEFAULT_PROVISION_COMMANDS) -> None:
    """Install the harness toolchain, stopping at the first failing command."""
    for cmd in commands:
        _run_step(cmd)


def check_tools(tools: tuple[str, ...] = REQUIRED_TOOLS) -> dict[str, Any]:
    """Preflight check that every harness tool is on PATH.

    Returns:
        Dict mapping each tool to its resolved path.

    Raises:
        ProvisioningError: If any tool is missing.
    """
    info: dict[str, Any] = {}
    missing: list[str] = []
    for tool in tools:
        path = shutil.which(tool)
        info[tool] = path
        if path is None:
            missing.append(tool)

    if missing:
        raise ProvisioningError(f"required tools not found in PATH: {', '.join(missing)}")

    logger.debug("Preflight tools: %s", info)
    return info
