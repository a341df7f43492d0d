from __future__ import annotations

from dataclasses import replace

from .models import RecipeEntry, RecipeResult

ACCURACY_LABELS = (
    (95.0, "Excellent"),
    (85.0, "Very Good"),
    (75.0, "Good"),
    (60.0, "Acceptable"),
)


def accuracy_label(accuracy: float) -> str:
    for threshold, label in ACCURACY_LABELS:
        if accuracy >= threshold:
            return label
    return "Approximate"


def scale_recipe(result: RecipeResult, amount: float) -> RecipeResult:
    """Multiply every entry by a batch ``amount`` (e.g. 2.0 for a double batch)."""
    if amount <= 0:
        raise ValueError("scale amount must be positive")
    return replace(
        result,
        recipe=tuple(
            RecipeEntry(pigment=entry.pigment, parts=entry.parts * amount)
            for entry in result.recipe
        ),
    )


def format_recipe_text(result: RecipeResult, scale: float = 1.0) -> str:
    scaled = scale_recipe(result, scale) if scale != 1.0 else result
    total = scaled.total_parts
    fmt = ".1f" if scale == 1.0 else ".2f"

    lines = [
        f"TARGET COLOR: {result.target_hex}",
        f"ACHIEVED COLOR: {result.achieved_hex}",
        f"MATCH ACCURACY: {result.accuracy:.1f}% ({accuracy_label(result.accuracy)})",
        "",
        "RECIPE:",
    ]
    for entry in scaled.recipe:
        share = entry.parts / total * 100.0 if total else 0.0
        lines.append(
            f"- {entry.parts:{fmt}} parts {entry.pigment.name} "
            f"({entry.pigment.id}) {share:.0f}%"
        )
    lines.extend(["", f"TOTAL: {total:{fmt}} parts"])
    return "\n".join(lines)
