import logging
import os
from dataclasses import dataclass

from .compat import env_bool, getenv_with_fallback

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_MARKER_LABEL",
    "GITHUB_API_URL",
    "PipelineConfig",
]

# Trigger
DEFAULT_MARKER_LABEL = "benchmark"

# Benchmarked target (cargo package + bench entry points)
TARGET_PACKAGE = "kimchi"
IAI_BENCH = "proof_iai"
CRITERION_BENCH = "proof_criterion"

# Publishing (GitHub REST API)
GITHUB_API_URL = "https://api.github.com"
PUBLISH_TIMEOUT_SECONDS = 30.0
# GitHub rejects issue comments longer than this
GITHUB_COMMENT_MAX_CHARS = 65536

# Logging
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def get_log_level() -> str:
    return (os.getenv("PRBENCH_LOG_LEVEL", "") or "INFO").strip().upper()


def _parse_max_chars(raw: str) -> int | None:
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"PRBENCH_MAX_OUTPUT_CHARS must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise RuntimeError(f"PRBENCH_MAX_OUTPUT_CHARS must be positive, got {value}")
    return value


@dataclass(frozen=True)
class PipelineConfig:
    github_token: str | None = None  # Optional; required only when publishing
    api_url: str = GITHUB_API_URL
    marker_label: str = DEFAULT_MARKER_LABEL
    target_package: str = TARGET_PACKAGE
    iai_bench: str = IAI_BENCH
    criterion_bench: str = CRITERION_BENCH
    publish_timeout: float = PUBLISH_TIMEOUT_SECONDS
    max_output_chars: int | None = None
    skip_provision: bool = False

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        token = getenv_with_fallback("GITHUB_TOKEN", "GH_TOKEN").strip() or None

        timeout_raw = os.getenv("PRBENCH_PUBLISH_TIMEOUT", "").strip()
        timeout = PUBLISH_TIMEOUT_SECONDS
        if timeout_raw:
            try:
                timeout = float(timeout_raw)
            except ValueError as exc:
                raise RuntimeError(
                    f"PRBENCH_PUBLISH_TIMEOUT must be a number, got {timeout_raw!r}"
                ) from exc
        if timeout <= 0:
            raise RuntimeError(f"PRBENCH_PUBLISH_TIMEOUT must be positive, got {timeout}")

        marker = os.getenv("PRBENCH_MARKER_LABEL", "") or DEFAULT_MARKER_LABEL
        if marker != DEFAULT_MARKER_LABEL:
            logger.debug("Using PRBENCH_MARKER_LABEL: %s", marker)

        return cls(
            github_token=token,
            api_url=(os.getenv("GITHUB_API_URL", "") or GITHUB_API_URL).rstrip("/"),
            marker_label=marker,
            target_package=os.getenv("PRBENCH_TARGET_PACKAGE", "") or TARGET_PACKAGE,
            iai_bench=os.getenv("PRBENCH_IAI_BENCH", "") or IAI_BENCH,
            criterion_bench=os.getenv("PRBENCH_CRITERION_BENCH", "") or CRITERION_BENCH,
            publish_timeout=timeout,
            max_output_chars=_parse_max_chars(os.getenv("PRBENCH_MAX_OUTPUT_CHARS", "")),
            skip_provision=env_bool("PRBENCH_SKIP_PROVISION", default=False),
        )
