from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from pathlib import Path

from .catalog import load_builtin_catalog, load_catalog
from .models import CatalogMatch, Pigment, RecipeResult
from .ranking import DEFAULT_LIMIT, rank_catalog
from .recipe import RecipeSearchConfig, calculate_recipe

logger = logging.getLogger(__name__)


class PigmentMatcher:
    """Binds a pigment catalog and search settings for repeated lookups.

    The catalog comes from, in order of precedence, ``catalog``,
    ``catalog_path`` or the built-in catalog named ``builtin``.
    """

    def __init__(
        self,
        catalog: Sequence[Pigment] | None = None,
        catalog_path: str | Path | None = None,
        builtin: str = "rosco",
        config: RecipeSearchConfig | None = None,
    ) -> None:
        if catalog is not None:
            self.catalog = list(catalog)
            self.catalog_source = "memory"
        elif catalog_path is not None:
            self.catalog = load_catalog(catalog_path)
            self.catalog_source = str(catalog_path)
        else:
            self.catalog = load_builtin_catalog(builtin)
            self.catalog_source = builtin
        self.config = config or RecipeSearchConfig()

    def match(
        self,
        target: str | Sequence[float],
        limit: int = DEFAULT_LIMIT,
        inventory: Collection[str] | None = None,
        brand: str | None = None,
    ) -> list[CatalogMatch]:
        matches = rank_catalog(
            target, self.catalog, limit=limit, inventory=inventory, brand=brand
        )
        if not matches:
            logger.warning(f"No eligible pigments in catalog '{self.catalog_source}'")
        return matches

    def recipe(
        self,
        target: str | Sequence[float],
        inventory: Collection[str] | None = None,
    ) -> RecipeResult | None:
        result = calculate_recipe(
            target, self.catalog, inventory=inventory, config=self.config
        )
        if result is None:
            logger.warning(f"No eligible pigments in catalog '{self.catalog_source}'")
        return result
