from __future__ import annotations

import csv
import json
import logging
from collections.abc import Collection, Iterable, Sequence
from pathlib import Path

from .convert import clamp_rgb, parse_hex
from .models import PIGMENT_ROLES, Pigment

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"
BUILTIN_CATALOGS = {
    "rosco": DATA_DIR / "rosco.csv",
    "commercial": DATA_DIR / "commercial.csv",
}


class CatalogValidationError(ValueError):
    pass


def builtin_catalog_names() -> list[str]:
    return sorted(BUILTIN_CATALOGS)


def load_builtin_catalog(name: str) -> list[Pigment]:
    path = BUILTIN_CATALOGS.get(name.strip().lower())
    if path is None:
        raise CatalogValidationError(
            f"unknown catalog '{name}'. Use one of: {', '.join(builtin_catalog_names())}"
        )
    return load_catalog(path)


def load_catalog(path_like: str | Path) -> list[Pigment]:
    path = Path(path_like)
    if not path.exists():
        raise CatalogValidationError(f"catalog file does not exist: {path}")

    if path.suffix.lower() == ".csv":
        pigments = _load_csv(path)
    elif path.suffix.lower() == ".json":
        pigments = _load_json(path)
    else:
        raise CatalogValidationError(
            f"unsupported catalog format '{path.suffix}'. Use .csv or .json"
        )

    if not pigments:
        raise CatalogValidationError(f"catalog has no usable entries: {path}")
    _check_unique_ids(pigments, path)
    logger.info(f"Loaded {len(pigments)} pigments from {path.name}")
    return pigments


def filter_catalog(
    catalog: Iterable[Pigment],
    inventory: Collection[str] | None = None,
    brand: str | None = None,
) -> list[Pigment]:
    """Restrict ``catalog`` to in-stock ids and/or one brand, keeping order."""
    pigments = list(catalog)
    if inventory is not None:
        allowed = set(inventory)
        pigments = [pigment for pigment in pigments if pigment.id in allowed]
    if brand:
        wanted = brand.strip().lower()
        pigments = [
            pigment
            for pigment in pigments
            if pigment.brand is not None and pigment.brand.lower() == wanted
        ]
    return pigments


def brands(catalog: Iterable[Pigment]) -> list[str]:
    seen: dict[str, None] = {}
    for pigment in catalog:
        if pigment.brand:
            seen.setdefault(pigment.brand, None)
    return list(seen)


def _load_csv(path: Path) -> list[Pigment]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise CatalogValidationError(f"catalog csv has no header: {path}")

        pigments: list[Pigment] = []
        for idx, row in enumerate(reader, start=2):
            pigments.append(_parse_pigment(row, f"{path}:{idx}"))
        return pigments


def _load_json(path: Path) -> list[Pigment]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CatalogValidationError(f"catalog json at {path} is not valid json") from exc

    if isinstance(payload, dict):
        if "pigments" not in payload or not isinstance(payload["pigments"], list):
            raise CatalogValidationError(
                f"json catalog at {path} must be a list or include a 'pigments' list"
            )
        records = payload["pigments"]
    elif isinstance(payload, list):
        records = payload
    else:
        raise CatalogValidationError(
            f"json catalog at {path} must be a list or object with 'pigments'"
        )

    pigments: list[Pigment] = []
    for idx, record in enumerate(records, start=1):
        if not isinstance(record, dict):
            raise CatalogValidationError(
                f"invalid catalog entry at {path}:{idx} (expected object)"
            )
        pigments.append(_parse_pigment(record, f"{path}:{idx}"))
    return pigments


def _parse_pigment(raw_entry: dict[str, object], location: str) -> Pigment:
    normalized: dict[str, object] = {
        str(key).strip().lower(): value
        for key, value in raw_entry.items()
        if key is not None
    }

    pigment_id = _as_clean_str(normalized.get("id"))
    if not pigment_id:
        raise CatalogValidationError(f"{location}: missing required field 'id'")

    name = _as_clean_str(normalized.get("name"))
    if not name:
        raise CatalogValidationError(f"{location}: missing required field 'name'")

    role = _as_clean_str(normalized.get("role"))
    if role is not None:
        role = role.lower()
        if role not in PIGMENT_ROLES:
            raise CatalogValidationError(
                f"{location}: unknown role '{role}', expected one of {PIGMENT_ROLES}"
            )

    return Pigment(
        id=pigment_id,
        name=name,
        rgb=_parse_color(normalized, location),
        brand=_as_clean_str(normalized.get("brand")),
        code=_as_clean_str(normalized.get("code")),
        role=role,
    )


def _parse_color(normalized: dict[str, object], location: str) -> tuple[int, int, int]:
    hex_value = _as_clean_str(normalized.get("hex"))
    if hex_value:
        rgb = parse_hex(hex_value)
        if rgb is None:
            raise CatalogValidationError(f"{location}: invalid hex color '{hex_value}'")
        return rgb

    channels = [normalized.get(key) for key in ("r", "g", "b")]
    if any(channel is None or channel == "" for channel in channels):
        raise CatalogValidationError(
            f"{location}: provide either 'hex' or numeric 'r','g','b' values"
        )

    try:
        values = [float(channel) for channel in channels]
    except (TypeError, ValueError) as exc:
        raise CatalogValidationError(
            f"{location}: invalid rgb values, expected numeric r/g/b"
        ) from exc
    if not all(0 <= value <= 255 for value in values):
        raise CatalogValidationError(f"{location}: rgb values must be within 0-255")
    return clamp_rgb(values)


def _check_unique_ids(pigments: Sequence[Pigment], path: Path) -> None:
    seen: set[str] = set()
    for pigment in pigments:
        if pigment.id in seen:
            raise CatalogValidationError(f"duplicate pigment id '{pigment.id}' in {path}")
        seen.add(pigment.id)


def _as_clean_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None
