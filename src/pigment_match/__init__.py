from .catalog import (
    CatalogValidationError,
    filter_catalog,
    load_builtin_catalog,
    load_catalog,
)
from .convert import InvalidColorError, hex_to_rgb, parse_hex, rgb_to_hex, rgb_to_lab
from .distance import delta_e
from .mixing import mix_colors
from .models import CatalogMatch, Pigment, RecipeEntry, RecipeResult
from .pipeline import PigmentMatcher
from .ranking import rank_catalog
from .recipe import RecipeSearchConfig, calculate_recipe, normalize_recipe

__all__ = [
    "CatalogMatch",
    "CatalogValidationError",
    "InvalidColorError",
    "Pigment",
    "PigmentMatcher",
    "RecipeEntry",
    "RecipeResult",
    "RecipeSearchConfig",
    "calculate_recipe",
    "delta_e",
    "filter_catalog",
    "hex_to_rgb",
    "load_builtin_catalog",
    "load_catalog",
    "mix_colors",
    "normalize_recipe",
    "parse_hex",
    "rank_catalog",
    "rgb_to_hex",
    "rgb_to_lab",
]
