"""Configuration module for prbench."""

from pathlib import Path

import yaml

from .settings import (
    CRITERION_BENCH,
    DEFAULT_MARKER_LABEL,
    GITHUB_API_URL,
    GITHUB_COMMENT_MAX_CHARS,
    IAI_BENCH,
    LOG_FORMAT,
    PUBLISH_TIMEOUT_SECONDS,
    TARGET_PACKAGE,
    PipelineConfig,
    get_log_level,
)

# 載入 report.yaml
_TEMPLATE_PATH = Path(__file__).parent / "report.yaml"
with _TEMPLATE_PATH.open(encoding="utf-8") as f:
    _TEMPLATE = yaml.safe_load(f)

# Report template constants
REPORT_PREAMBLE: str = _TEMPLATE["preamble"].strip()
STATISTICAL_INTRO: str = _TEMPLATE["statistical_intro"].strip()
COUNTER_INTRO: str = _TEMPLATE["counter_intro"].strip()
TRUNCATION_NOTICE: str = _TEMPLATE["truncation_notice"].strip()

__all__ = [
    # Settings
    "CRITERION_BENCH",
    "DEFAULT_MARKER_LABEL",
    "GITHUB_API_URL",
    "GITHUB_COMMENT_MAX_CHARS",
    "IAI_BENCH",
    "LOG_FORMAT",
    "PUBLISH_TIMEOUT_SECONDS",
    "TARGET_PACKAGE",
    "PipelineConfig",
    "get_log_level",
    # Report template
    "REPORT_PREAMBLE",
    "STATISTICAL_INTRO",
    "COUNTER_INTRO",
    "TRUNCATION_NOTICE",
]
