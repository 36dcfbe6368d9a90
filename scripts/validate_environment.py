#!/usr/bin/env python3
"""Validate local nurse assignment environment readiness."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from nurse_assignment.domain.constraints import EngineConfig
from nurse_assignment.domain.errors import InsufficientCapacityError
from nurse_assignment.domain.models import (
    CalculationInput,
    DistributionPolicy,
    TotalCarePolicy,
)
from nurse_assignment.services.assignment_service import calculate_staff_assignments
from nurse_assignment.services.room_parser import format_room_list, parse_room_list
from nurse_assignment.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1: Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable
    package_specs = ["fastapi", "uvicorn", "pydantic", "httpx", "pytest"]
    import_errors: list[str] = []
    for module_name in package_specs:
        try:
            importlib.import_module(module_name)
        except Exception as exc:  # pragma: no cover - runtime guard
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 3: Settings load from environment
    try:
        settings = get_settings()
        ok, line = _print_result(
            "Settings",
            True,
            (
                f": distribution={settings.default_distribution_policy.value} "
                f"total_care={settings.default_total_care_policy.value}"
            ),
        )
    except Exception as exc:
        ok, line = _print_result("Settings", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4: Room list parsing round trip
    try:
        rooms = parse_room_list("101, 103-105, abc, 103")
        if rooms != [101, 103, 104, 105]:
            raise RuntimeError(f"unexpected parse result {rooms}")
        if parse_room_list(format_room_list(rooms)) != rooms:
            raise RuntimeError("format/parse round trip changed the room list")
        ok, line = _print_result("Room list parsing", True)
    except Exception as exc:
        ok, line = _print_result("Room list parsing", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 5: Sample calculation under every policy pair
    sample = CalculationInput(
        room_range_start=101,
        room_range_end=120,
        high_acuity_rooms=(103, 107),
        high_fall_risk_rooms=(103, 111),
        total_nurses=4,
        total_aides=1,
        max_patients_per_nurse=8,
        max_patients_per_aide=12,
    )
    for distribution_policy in DistributionPolicy:
        for total_care_policy in TotalCarePolicy:
            name = f"Calculation {distribution_policy.value}/{total_care_policy.value}"
            try:
                result = calculate_staff_assignments(
                    sample,
                    EngineConfig(
                        distribution_policy=distribution_policy,
                        total_care_policy=total_care_policy,
                    ),
                )
                assigned = sum(item.patient_count for item in result.nurse_assignments)
                if assigned != result.total_patient_count:
                    raise RuntimeError(
                        f"{assigned} rooms assigned for {result.total_patient_count} patients"
                    )
                ok, line = _print_result(name, True, f": {assigned} rooms")
            except Exception as exc:
                ok, line = _print_result(name, False, str(exc))
            results.append(line)
            all_passed = all_passed and ok

    # CHECK 6: Capacity gate rejects an understaffed shift
    try:
        calculate_staff_assignments(
            CalculationInput(
                room_range_start=101,
                room_range_end=110,
                total_nurses=5,
                max_patients_per_nurse=1,
            )
        )
        ok, line = _print_result("Capacity gate", False, "understaffed shift was accepted")
    except InsufficientCapacityError:
        ok, line = _print_result("Capacity gate", True)
    results.append(line)
    all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Nurse Assignment Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
