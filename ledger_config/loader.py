"""
Profile files -> frozen ``ledger_config.schema`` objects.

Callers normally go through ``ledger_config.get_active_config()``; the
functions here are the parsing steps it is built from.  Nothing is
caught: a missing file raises ``FileNotFoundError``, bad YAML raises
``yaml.YAMLError`` and an absent required key raises ``KeyError``.
Range checks live in ``ledger_config.validator``.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any

import yaml

from ledger_config.schema import FeeSchedule, LedgerProfile, TokenMetadata


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Read one YAML document; an empty file yields ``{}``."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_metadata(data: dict[str, Any]) -> TokenMetadata:
    """Parse TokenMetadata from a dict."""
    return TokenMetadata(
        name=data["name"],
        symbol=data["symbol"],
        decimals=data["decimals"],
        info_url=data.get("info_url"),
    )


def parse_fees(data: dict[str, Any]) -> FeeSchedule:
    """Parse FeeSchedule from a dict."""
    return FeeSchedule(
        referral_rate_bp=data["referral_rate_bp"],
        beneficiary_rate_bp=data["beneficiary_rate_bp"],
    )


def parse_profile(data: dict[str, Any]) -> LedgerProfile:
    """
    Parse a ``LedgerProfile`` from a dict and stamp its checksum.

    Raises:
        KeyError: if required keys are missing.
    """
    profile = LedgerProfile(
        profile_id=data["profile_id"],
        version=data.get("version", 1),
        metadata=parse_metadata(data["metadata"]),
        fees=parse_fees(data["fees"]),
        initial_units=data["supply"]["initial_units"],
        description=data.get("description", ""),
    )
    return replace(profile, checksum=compute_checksum(profile))


def load_profile(path: Path) -> LedgerProfile:
    """Load and parse one profile file."""
    return parse_profile(load_yaml_file(path))


def compute_checksum(profile: LedgerProfile) -> str:
    """
    SHA-256 of the profile's canonical JSON form.

    The checksum field itself is excluded, so the value is stable across
    re-parsing of the same source.
    """
    payload = asdict(profile)
    payload.pop("checksum", None)
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
