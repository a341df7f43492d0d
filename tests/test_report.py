from __future__ import annotations

import pytest

from pigment_match.models import Pigment, RecipeEntry, RecipeResult
from pigment_match.report import accuracy_label, format_recipe_text, scale_recipe

WHITE = Pigment(id="5330", name="White", rgb=(255, 255, 255), role="white")
VIOLET = Pigment(id="5360", name="Violet", rgb=(139, 0, 255))

RESULT = RecipeResult(
    target_hex="#8B4789",
    recipe=(
        RecipeEntry(pigment=VIOLET, parts=15.0),
        RecipeEntry(pigment=WHITE, parts=5.0),
    ),
    achieved_rgb=(160, 64, 255),
    accuracy=72.5,
    distance=3.4375,
)


@pytest.mark.parametrize(
    "accuracy,label",
    [
        (100.0, "Excellent"),
        (95.0, "Excellent"),
        (90.0, "Very Good"),
        (75.0, "Good"),
        (60.0, "Acceptable"),
        (59.9, "Approximate"),
        (0.0, "Approximate"),
    ],
)
def test_accuracy_label(accuracy, label):
    assert accuracy_label(accuracy) == label


def test_scale_recipe_multiplies_parts():
    scaled = scale_recipe(RESULT, 0.5)

    assert [entry.parts for entry in scaled.recipe] == [7.5, 2.5]
    assert scaled.total_parts == 10.0
    assert scaled.achieved_rgb == RESULT.achieved_rgb


def test_scale_recipe_rejects_non_positive_amount():
    with pytest.raises(ValueError):
        scale_recipe(RESULT, 0)


def test_format_recipe_text():
    text = format_recipe_text(RESULT)

    assert text.splitlines() == [
        "TARGET COLOR: #8B4789",
        "ACHIEVED COLOR: #A040FF",
        "MATCH ACCURACY: 72.5% (Acceptable)",
        "",
        "RECIPE:",
        "- 15.0 parts Violet (5360) 75%",
        "- 5.0 parts White (5330) 25%",
        "",
        "TOTAL: 20.0 parts",
    ]


def test_format_recipe_text_with_batch_scale():
    text = format_recipe_text(RESULT, scale=0.25)

    assert "- 3.75 parts Violet (5360) 75%" in text
    assert text.endswith("TOTAL: 5.00 parts")


def test_result_to_dict():
    payload = RESULT.to_dict()

    assert payload["target"] == "#8B4789"
    assert payload["achieved_hex"] == "#A040FF"
    assert payload["total_parts"] == 20.0
    assert payload["recipe"][0] == {
        "id": "5360",
        "name": "Violet",
        "hex": "#8B00FF",
        "parts": 15.0,
    }
