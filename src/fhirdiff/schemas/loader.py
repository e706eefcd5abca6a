"""Reading FHIR JSON documents from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def read_resource(path: str | Path) -> dict[str, Any]:
    """Read a FHIR resource from a JSON file.

    Args:
        path: Path to the resource file.

    Returns:
        The parsed resource.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file type is unsupported or the content isn't a JSON object.
    """
    resource_path = Path(path)
    if not resource_path.is_file():
        raise FileNotFoundError(f"FHIR resource not found: {resource_path}")

    extension = resource_path.suffix.lower()
    if extension in (".xml", ".ttl"):
        raise ValueError(f"Unsupported FHIR format {extension}, only JSON is supported")
    if extension != ".json":
        raise ValueError(f"Unrecognised file extension: {extension or '(none)'}")

    try:
        with open(resource_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed JSON in {resource_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {resource_path}")

    logger.debug("Read %s from %s", data.get("resourceType", "resource"), resource_path)
    return data
