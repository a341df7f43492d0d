from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from .catalog import BUILTIN_CATALOGS, CatalogValidationError
from .convert import InvalidColorError, hex_to_rgb, rgb_to_hex
from .pipeline import PigmentMatcher
from .ranking import DEFAULT_LIMIT
from .report import accuracy_label, scale_recipe

CATALOG_DIR_ENV = "PIGMENT_MATCH_CATALOG_DIR"


class MatchRequest(BaseModel):
    target: str = Field(..., description="Target color as #RRGGBB")
    catalog: str = Field(default="commercial", description="Catalog name")
    limit: int = Field(
        default=DEFAULT_LIMIT, ge=1, le=100, description="Maximum matches to return"
    )
    brand: str | None = Field(default=None, description="Only consider this brand")
    inventory: list[str] | None = Field(
        default=None, description="Pigment ids in stock"
    )


class RecipeRequest(BaseModel):
    target: str = Field(..., description="Target color as #RRGGBB")
    catalog: str = Field(default="rosco", description="Catalog name")
    inventory: list[str] | None = Field(
        default=None, description="Pigment ids in stock"
    )
    scale: float = Field(default=1.0, gt=0, description="Batch multiplier for parts")


class PigmentItem(BaseModel):
    id: str
    name: str
    hex: str
    rgb: list[int]
    brand: str | None
    code: str | None
    role: str | None


class MatchItem(PigmentItem):
    distance: float
    accuracy: float


class MatchResponse(BaseModel):
    target: str
    matches: list[MatchItem]


class RecipeItem(BaseModel):
    id: str
    name: str
    hex: str
    parts: float


class RecipeResponse(BaseModel):
    target: str
    recipe: list[RecipeItem]
    achieved_hex: str
    achieved_rgb: list[int]
    accuracy: float
    accuracy_label: str
    distance: float
    total_parts: float


app = FastAPI(
    title="Pigment Match API",
    version="1.0.0",
    description="Rank catalog paints against a color and compute mixing recipes.",
)


def _catalog_path(name: str) -> Path:
    key = name.strip().lower()
    if key in BUILTIN_CATALOGS:
        return BUILTIN_CATALOGS[key]

    catalog_dir = os.environ.get(CATALOG_DIR_ENV)
    if catalog_dir and key.replace("-", "").replace("_", "").isalnum():
        for suffix in (".csv", ".json"):
            candidate = Path(catalog_dir) / f"{key}{suffix}"
            if candidate.exists():
                return candidate
    raise HTTPException(status_code=404, detail=f"unknown_catalog: {name}")


@lru_cache(maxsize=None)
def _builtin_matcher(name: str) -> PigmentMatcher:
    return PigmentMatcher(builtin=name)


def _build_matcher(catalog: str) -> PigmentMatcher:
    key = catalog.strip().lower()
    if key in BUILTIN_CATALOGS:
        return _builtin_matcher(key)

    path = _catalog_path(catalog)
    try:
        return PigmentMatcher(catalog_path=path)
    except CatalogValidationError as exc:
        raise HTTPException(
            status_code=500, detail=f"invalid_catalog: {exc}"
        ) from exc


@app.get("/catalogs/{name}", response_model=list[PigmentItem])
async def get_catalog(name: str) -> list[PigmentItem]:
    matcher = await run_in_threadpool(_build_matcher, name)
    return [PigmentItem(**pigment.to_dict()) for pigment in matcher.catalog]


@app.post("/match", response_model=MatchResponse)
async def match_paints(payload: MatchRequest) -> MatchResponse:
    matcher = await run_in_threadpool(_build_matcher, payload.catalog)
    try:
        target = rgb_to_hex(hex_to_rgb(payload.target))
        matches = await run_in_threadpool(
            matcher.match,
            target,
            payload.limit,
            payload.inventory,
            payload.brand,
        )
    except InvalidColorError as exc:
        raise HTTPException(status_code=400, detail=f"invalid_color: {exc}") from exc

    if not matches:
        raise HTTPException(status_code=404, detail="no_eligible_pigments")
    return MatchResponse(
        target=target,
        matches=[MatchItem(**match.to_dict()) for match in matches],
    )


@app.post("/recipe", response_model=RecipeResponse)
async def mix_recipe(payload: RecipeRequest) -> RecipeResponse:
    matcher = await run_in_threadpool(_build_matcher, payload.catalog)
    try:
        result = await run_in_threadpool(
            matcher.recipe, payload.target, payload.inventory
        )
    except InvalidColorError as exc:
        raise HTTPException(status_code=400, detail=f"invalid_color: {exc}") from exc

    if result is None:
        raise HTTPException(status_code=404, detail="no_eligible_pigments")
    if payload.scale != 1.0:
        result = scale_recipe(result, payload.scale)

    body = result.to_dict()
    return RecipeResponse(
        target=body["target"],
        recipe=[RecipeItem(**entry) for entry in body["recipe"]],
        achieved_hex=body["achieved_hex"],
        achieved_rgb=body["achieved_rgb"],
        accuracy=body["accuracy"],
        accuracy_label=accuracy_label(result.accuracy),
        distance=body["distance"],
        total_parts=body["total_parts"],
    )
