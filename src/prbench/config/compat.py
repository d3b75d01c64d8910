import logging
import os
import warnings

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "y", "on"}
_FALSY = {"0", "false", "no", "n", "off"}


def getenv_with_fallback(name: str, legacy_name: str, default: str = "") -> str:
    """Read ``name``, accepting ``legacy_name`` for older workflow files.

    Used for the publish token: ``GITHUB_TOKEN`` wins, ``GH_TOKEN`` still works
    but warns. Blank values count as unset.
    """
    value = os.getenv(name, "").strip()
    if value:
        return value
    legacy = os.getenv(legacy_name, "").strip()
    if not legacy:
        return default
    warnings.warn(
        f"{legacy_name} is deprecated for prbench; set {name} in the workflow env instead.",
        DeprecationWarning,
        stacklevel=3,
    )
    logger.warning("Using %s for %s; rename it in the workflow", legacy_name, name)
    return legacy


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    if raw:
        logger.warning("Ignoring unrecognised boolean value %s=%r", name, raw)
    return default
