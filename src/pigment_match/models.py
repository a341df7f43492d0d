from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .convert import LAB, RGB, rgb_to_hex, rgb_to_lab

WHITE_ROLE = "white"
BLACK_ROLE = "black"
PIGMENT_ROLES = (WHITE_ROLE, BLACK_ROLE)


@dataclass(frozen=True)
class Pigment:
    id: str
    name: str
    rgb: RGB
    brand: str | None = None
    code: str | None = None
    role: str | None = None

    @property
    def hex(self) -> str:
        return rgb_to_hex(self.rgb)

    @property
    def lab(self) -> LAB:
        return rgb_to_lab(self.rgb)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "hex": self.hex,
            "rgb": list(self.rgb),
            "brand": self.brand,
            "code": self.code,
            "role": self.role,
        }


@dataclass(frozen=True)
class RecipeEntry:
    pigment: Pigment
    parts: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.pigment.id,
            "name": self.pigment.name,
            "hex": self.pigment.hex,
            "parts": float(self.parts),
        }


@dataclass(frozen=True)
class RecipeResult:
    target_hex: str
    recipe: tuple[RecipeEntry, ...]
    achieved_rgb: RGB
    accuracy: float
    distance: float

    @property
    def achieved_hex(self) -> str:
        return rgb_to_hex(self.achieved_rgb)

    @property
    def total_parts(self) -> float:
        return float(sum(entry.parts for entry in self.recipe))

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": self.target_hex,
            "recipe": [entry.to_dict() for entry in self.recipe],
            "achieved_hex": self.achieved_hex,
            "achieved_rgb": list(self.achieved_rgb),
            "accuracy": float(self.accuracy),
            "distance": float(self.distance),
            "total_parts": self.total_parts,
        }


@dataclass(frozen=True)
class CatalogMatch:
    pigment: Pigment
    distance: float
    accuracy: float

    def to_dict(self) -> dict[str, Any]:
        payload = self.pigment.to_dict()
        payload["distance"] = float(self.distance)
        payload["accuracy"] = float(self.accuracy)
        return payload
