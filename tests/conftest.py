"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def types_dir() -> Path:
    """Return the directory holding the data type bundle."""
    return FIXTURES_DIR / "types"


@pytest.fixture
def profiles_dir() -> Path:
    """Return the directory holding Patient profiles."""
    return FIXTURES_DIR / "profiles"


@pytest.fixture
def structure_definition() -> Callable[..., dict[str, Any]]:
    """Build a minimal StructureDefinition resource."""

    def build(
        snapshot: list[dict[str, Any]],
        differential: list[dict[str, Any]] | None = None,
        type_name: str = "Patient",
        resource_id: str | None = None,
    ) -> dict[str, Any]:
        return {
            "resourceType": "StructureDefinition",
            "id": resource_id or type_name,
            "name": resource_id or type_name,
            "type": type_name,
            "snapshot": {"element": snapshot},
            "differential": {"element": differential or []},
        }

    return build


@pytest.fixture
def patient_snapshot() -> list[dict[str, Any]]:
    """Snapshot elements of a small Patient resource."""
    return [
        {"path": "Patient", "min": 0, "max": "*"},
        {"path": "Patient.extension", "min": 0, "max": "*", "type": [{"code": "Extension"}]},
        {"path": "Patient.name", "min": 0, "max": "*", "type": [{"code": "HumanName"}]},
        {
            "path": "Patient.gender",
            "min": 0,
            "max": "1",
            "type": [{"code": "code"}],
            "binding": {
                "strength": "required",
                "valueSetReference": {
                    "reference": "http://hl7.org/fhir/ValueSet/administrative-gender"
                },
            },
        },
        {"path": "Patient.birthDate", "min": 0, "max": "1", "type": [{"code": "date"}]},
        {"path": "Patient.contact", "min": 0, "max": "*", "type": [{"code": "BackboneElement"}]},
        {
            "path": "Patient.contact.name",
            "min": 0,
            "max": "1",
            "type": [{"code": "HumanName"}],
        },
    ]
