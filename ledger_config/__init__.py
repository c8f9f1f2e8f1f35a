"""
ledger_config -- single public entrypoint for ledger deployment profiles.

Responsibility:
    Provides the ONLY way to obtain a ledger profile at runtime through
    ``get_active_config()``.  Profiles are YAML files under ``sets/``;
    callers never read them directly.

Architecture position:
    Configuration.  Sits above ``ledger_kernel`` and below
    ``ledger_services``.  The kernel MUST NEVER import from
    ``ledger_config``.

Failure modes:
    - ``FileNotFoundError`` -- no profile with the requested id.
    - ``ConfigValidationError`` -- the profile failed validation.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``ledger_config_trace`` log entry with profile id, version, and
    checksum, tying a deployed ledger back to the exact profile source.
"""

from __future__ import annotations

from pathlib import Path

from ledger_config.loader import compute_checksum, load_profile
from ledger_config.schema import FeeSchedule, LedgerProfile, TokenMetadata
from ledger_config.validator import ConfigValidationError, validate_profile
from ledger_kernel.logging_config import get_logger

_logger = get_logger("config")

# Default profile directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"

DEFAULT_PROFILE = "standard"


def available_profiles(config_dir: Path | None = None) -> list[str]:
    """Profile ids found in ``config_dir`` (default: the bundled sets)."""
    sets_dir = config_dir or _DEFAULT_CONFIG_DIR
    return sorted(p.stem for p in sets_dir.glob("*.yaml"))


def get_active_config(
    profile_id: str = DEFAULT_PROFILE,
    config_dir: Path | None = None,
) -> LedgerProfile:
    """
    Load and validate a ledger profile.

    Args:
        profile_id: Name of ``<profile_id>.yaml`` in the sets directory.
        config_dir: Override path to the sets directory.

    Returns:
        A validated, checksummed ``LedgerProfile``.

    Raises:
        FileNotFoundError: If the profile file does not exist.
        ConfigValidationError: If the profile fails validation.
    """
    sets_dir = config_dir or _DEFAULT_CONFIG_DIR
    path = sets_dir / f"{profile_id}.yaml"
    if not path.is_file():
        raise FileNotFoundError(
            f"No ledger profile '{profile_id}' in {sets_dir}"
        )

    profile = load_profile(path)
    if profile.profile_id != profile_id:
        raise ConfigValidationError(
            profile_id,
            [f"file declares profile_id '{profile.profile_id}'"],
        )

    validation = validate_profile(profile)
    if not validation.is_valid:
        raise ConfigValidationError(profile_id, validation.errors)

    _logger.info(
        "ledger_config_trace",
        extra={
            "profile_id": profile.profile_id,
            "version": profile.version,
            "checksum": profile.checksum,
            "symbol": profile.metadata.symbol,
            "referral_rate_bp": profile.fees.referral_rate_bp,
            "beneficiary_rate_bp": profile.fees.beneficiary_rate_bp,
        },
    )
    return profile


__all__ = [
    "ConfigValidationError",
    "DEFAULT_PROFILE",
    "FeeSchedule",
    "LedgerProfile",
    "TokenMetadata",
    "available_profiles",
    "compute_checksum",
    "get_active_config",
    "validate_profile",
]
