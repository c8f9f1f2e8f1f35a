"""Tests for ledger profile loading, validation, and the config entrypoint."""

from dataclasses import replace
from pathlib import Path

import pytest
import yaml

from ledger_config import (
    DEFAULT_PROFILE,
    ConfigValidationError,
    FeeSchedule,
    TokenMetadata,
    available_profiles,
    compute_checksum,
    get_active_config,
    validate_profile,
)
from ledger_config.loader import load_profile, parse_profile

VALID_PROFILE = {
    "profile_id": "custom",
    "version": 3,
    "description": "Test profile",
    "metadata": {"name": "Test Token", "symbol": "TST", "decimals": 2},
    "supply": {"initial_units": 1_000},
    "fees": {"referral_rate_bp": 10, "beneficiary_rate_bp": 20},
}


def _write_profile(directory: Path, data: dict, name: str | None = None) -> Path:
    path = directory / f"{name or data['profile_id']}.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


class TestBundledProfiles:

    def test_available_profiles(self):
        assert available_profiles() == ["legacy", "standard"]

    def test_standard_is_default(self):
        profile = get_active_config()
        assert profile.profile_id == DEFAULT_PROFILE == "standard"
        assert profile.fees == FeeSchedule(referral_rate_bp=50, beneficiary_rate_bp=100)
        assert profile.metadata.symbol == "RFT"
        assert profile.initial_supply == 1_000_000_000 * 10**9

    def test_legacy_profile(self):
        profile = get_active_config("legacy")
        assert profile.fees == FeeSchedule(referral_rate_bp=25, beneficiary_rate_bp=50)
        assert profile.metadata.info_url == "https://example.org/referral-token"

    def test_bundled_profiles_validate(self):
        for profile_id in available_profiles():
            assert validate_profile(get_active_config(profile_id)).is_valid

    def test_config_trace_logged(self, captured_logs):
        profile = get_active_config("standard")
        record = next(r for r in captured_logs() if r["message"] == "ledger_config_trace")
        assert record["profile_id"] == "standard"
        assert record["checksum"] == profile.checksum


class TestLoader:

    def test_parse_profile(self):
        profile = parse_profile(VALID_PROFILE)
        assert profile.metadata == TokenMetadata(name="Test Token", symbol="TST", decimals=2)
        assert profile.initial_supply == 100_000
        assert profile.version == 3

    def test_checksum_stamped_and_stable(self, tmp_path):
        path = _write_profile(tmp_path, VALID_PROFILE)
        first = load_profile(path)
        second = load_profile(path)
        assert len(first.checksum) == 64
        assert first.checksum == second.checksum
        assert compute_checksum(first) == first.checksum

    def test_checksum_tracks_content(self):
        changed = dict(VALID_PROFILE, fees={"referral_rate_bp": 11, "beneficiary_rate_bp": 20})
        assert parse_profile(changed).checksum != parse_profile(VALID_PROFILE).checksum

    def test_missing_key_raises(self):
        data = {k: v for k, v in VALID_PROFILE.items() if k != "fees"}
        with pytest.raises(KeyError):
            parse_profile(data)


class TestValidation:

    def test_valid_profile(self):
        assert validate_profile(parse_profile(VALID_PROFILE)).is_valid

    def test_misordered_fees_reported(self):
        profile = parse_profile(VALID_PROFILE)
        bad = replace(profile, fees=FeeSchedule(referral_rate_bp=30, beneficiary_rate_bp=20))
        result = validate_profile(bad)
        assert not result.is_valid
        assert any(e.startswith("fees:") for e in result.errors)

    def test_all_errors_collected(self):
        profile = parse_profile(VALID_PROFILE)
        bad = replace(
            profile,
            metadata=TokenMetadata(name="", symbol="", decimals=40),
            initial_units=0,
            fees=FeeSchedule(referral_rate_bp=0, beneficiary_rate_bp=900),
        )
        assert len(validate_profile(bad).errors) == 5

    def test_supply_above_storable_maximum(self):
        profile = parse_profile(VALID_PROFILE)
        bad = replace(
            profile,
            metadata=TokenMetadata(name="Big", symbol="BIG", decimals=18),
            initial_units=10,
        )
        result = validate_profile(bad)
        assert not result.is_valid
        assert "exceeds maximum" in result.errors[0]


class TestGetActiveConfig:

    def test_custom_directory(self, tmp_path):
        _write_profile(tmp_path, VALID_PROFILE)
        profile = get_active_config("custom", config_dir=tmp_path)
        assert profile.metadata.symbol == "TST"
        assert available_profiles(tmp_path) == ["custom"]

    def test_missing_profile(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_config("nope", config_dir=tmp_path)

    def test_profile_id_must_match_filename(self, tmp_path):
        _write_profile(tmp_path, VALID_PROFILE, name="other")
        with pytest.raises(ConfigValidationError) as exc_info:
            get_active_config("other", config_dir=tmp_path)
        assert exc_info.value.profile_id == "other"

    def test_invalid_profile_rejected(self, tmp_path):
        data = dict(VALID_PROFILE, fees={"referral_rate_bp": 50, "beneficiary_rate_bp": 20})
        _write_profile(tmp_path, data)
        with pytest.raises(ConfigValidationError) as exc_info:
            get_active_config("custom", config_dir=tmp_path)
        assert exc_info.value.code == "CONFIG_VALIDATION_FAILED"
        assert exc_info.value.errors
