from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .models import CatalogMatch, Pigment, RecipeResult


def result_payload(
    result: RecipeResult | list[CatalogMatch] | list[Pigment] | None,
) -> Any:
    if result is None:
        return None
    if isinstance(result, RecipeResult):
        return result.to_dict()
    return [item.to_dict() for item in result]


def dump_result_json(
    result: RecipeResult | list[CatalogMatch] | list[Pigment] | None,
) -> str:
    return json.dumps(result_payload(result), indent=2)


def write_result_json(
    result: RecipeResult | list[CatalogMatch] | list[Pigment] | None,
    output_path: str | Path,
) -> None:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_result_json(result) + "\n", encoding="utf-8")
