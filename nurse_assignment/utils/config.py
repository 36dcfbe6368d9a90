"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from nurse_assignment.domain.models import DistributionPolicy, TotalCarePolicy


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    default_distribution_policy: DistributionPolicy
    default_total_care_policy: TotalCarePolicy
    total_care_max_per_nurse: int
    default_max_patients_per_nurse: int
    default_max_patients_per_aide: int
    max_room_span: int


def _read_int(name: str, default: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc


def _read_distribution_policy(default: DistributionPolicy) -> DistributionPolicy:
    raw_value = os.getenv("DISTRIBUTION_POLICY")
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return DistributionPolicy(raw_value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(policy.value for policy in DistributionPolicy)
        raise ValueError(
            f"DISTRIBUTION_POLICY must be one of: {allowed}; got {raw_value!r}"
        ) from exc


def _read_total_care_policy(default: TotalCarePolicy) -> TotalCarePolicy:
    raw_value = os.getenv("TOTAL_CARE_POLICY")
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return TotalCarePolicy(raw_value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(policy.value for policy in TotalCarePolicy)
        raise ValueError(
            f"TOTAL_CARE_POLICY must be one of: {allowed}; got {raw_value!r}"
        ) from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; call ``get_settings.cache_clear()`` to reload."""
    return Settings(
        app_name=os.getenv("APP_NAME", "Nurse Assignment Calculator"),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        default_distribution_policy=_read_distribution_policy(DistributionPolicy.ZONE),
        default_total_care_policy=_read_total_care_policy(TotalCarePolicy.GLOBAL_PRIORITY),
        total_care_max_per_nurse=_read_int("TOTAL_CARE_MAX_PER_NURSE", 3),
        default_max_patients_per_nurse=_read_int("DEFAULT_MAX_PATIENTS_PER_NURSE", 8),
        default_max_patients_per_aide=_read_int("DEFAULT_MAX_PATIENTS_PER_AIDE", 12),
        max_room_span=_read_int("MAX_ROOM_SPAN", 2000),
    )
