"""JSON Schema export functions for swiftbuild.

Exports JSON Schema Draft 2020-12 documents from the pydantic models, for
editor support on swiftbuild.yaml and for hosts that consume plan JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from swiftbuild_core.compiler.models import GenerationPlan
from swiftbuild_core.schemas import CompilerConfig

JSON_SCHEMA_DRAFT = "https://json-schema.org/draft/2020-12/schema"
SCHEMA_ID_BASE = "https://swiftbuild.dev/schemas"


def _export(
    model: type[BaseModel],
    schema_id: str,
    output_path: Path | str | None,
) -> dict[str, Any]:
    schema = model.model_json_schema()
    schema["$schema"] = JSON_SCHEMA_DRAFT
    schema["$id"] = f"{SCHEMA_ID_BASE}/{schema_id}"

    if "additionalProperties" not in schema:
        schema["additionalProperties"] = False

    if output_path is not None:
        _write_schema_file(schema, output_path)

    return schema


def export_compiler_config_schema(output_path: Path | str | None = None) -> dict[str, Any]:
    """Export the swiftbuild.yaml (CompilerConfig) JSON Schema.

    Args:
        output_path: Optional file to write. Parent directories are created.

    Returns:
        The JSON Schema.

    Example:
        >>> schema = export_compiler_config_schema()
        >>> schema["title"]
        'CompilerConfig'
    """
    return _export(CompilerConfig, "swiftbuild.schema.json", output_path)


def export_generation_plan_schema(output_path: Path | str | None = None) -> dict[str, Any]:
    """Export the GenerationPlan JSON Schema consumed by host executors."""
    return _export(GenerationPlan, "generation-plan.schema.json", output_path)


def _write_schema_file(schema: dict[str, Any], path: Path | str) -> None:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(schema, indent=2))
