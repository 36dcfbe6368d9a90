"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from nurse_assignment.domain.models import DistributionPolicy, TotalCarePolicy
from nurse_assignment.utils.config import get_settings


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch) -> None:
    for name in (
        "DISTRIBUTION_POLICY",
        "TOTAL_CARE_POLICY",
        "TOTAL_CARE_MAX_PER_NURSE",
        "DEFAULT_MAX_PATIENTS_PER_NURSE",
        "DEFAULT_MAX_PATIENTS_PER_AIDE",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.default_distribution_policy is DistributionPolicy.ZONE
    assert settings.default_total_care_policy is TotalCarePolicy.GLOBAL_PRIORITY
    assert settings.total_care_max_per_nurse == 3
    assert settings.default_max_patients_per_nurse == 8
    assert settings.default_max_patients_per_aide == 12


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("DISTRIBUTION_POLICY", " Round_Robin ")
    monkeypatch.setenv("TOTAL_CARE_POLICY", "per_nurse_proportional")
    monkeypatch.setenv("TOTAL_CARE_MAX_PER_NURSE", "4")

    settings = get_settings()

    assert settings.default_distribution_policy is DistributionPolicy.ROUND_ROBIN
    assert settings.default_total_care_policy is TotalCarePolicy.PER_NURSE_PROPORTIONAL
    assert settings.total_care_max_per_nurse == 4


def test_unknown_policy_names_the_variable(monkeypatch) -> None:
    monkeypatch.setenv("DISTRIBUTION_POLICY", "nearest")

    with pytest.raises(ValueError, match="DISTRIBUTION_POLICY"):
        get_settings()


def test_non_integer_limit_names_the_variable(monkeypatch) -> None:
    monkeypatch.setenv("TOTAL_CARE_MAX_PER_NURSE", "three")

    with pytest.raises(ValueError, match="TOTAL_CARE_MAX_PER_NURSE"):
        get_settings()


def test_max_room_span_from_environment(monkeypatch) -> None:
    monkeypatch.delenv("MAX_ROOM_SPAN", raising=False)
    assert get_settings().max_room_span == 2000

    get_settings.cache_clear()
    monkeypatch.setenv("MAX_ROOM_SPAN", "500")

    assert get_settings().max_room_span == 500
