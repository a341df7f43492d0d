from __future__ import annotations

import json

import pytest

from pigment_match.catalog import (
    CatalogValidationError,
    brands,
    builtin_catalog_names,
    filter_catalog,
    load_builtin_catalog,
    load_catalog,
)


def test_load_catalog_from_csv_hex(tmp_path):
    catalog_file = tmp_path / "catalog.csv"
    catalog_file.write_text(
        "id,name,hex,role\n"
        "w1,Titanium White,#ffffff,White\n"
        "c1,Cadmium Red,#E30022,\n",
        encoding="utf-8",
    )

    pigments = load_catalog(catalog_file)

    assert len(pigments) == 2
    assert pigments[0].id == "w1"
    assert pigments[0].role == "white"
    assert pigments[1].name == "Cadmium Red"
    assert pigments[1].rgb == (227, 0, 34)
    assert pigments[1].hex == "#E30022"
    assert pigments[1].role is None


def test_load_catalog_from_json_rgb(tmp_path):
    catalog_file = tmp_path / "catalog.json"
    catalog_file.write_text(
        json.dumps(
            {
                "pigments": [
                    {"ID": "k", "Name": "Lamp Black", "r": 20, "g": 20, "b": 22, "role": "black"},
                    {"id": "u", "name": "Ultramarine", "hex": "#4166F5", "brand": "Rosco"},
                ]
            }
        ),
        encoding="utf-8",
    )

    pigments = load_catalog(catalog_file)

    assert [p.id for p in pigments] == ["k", "u"]
    assert pigments[0].rgb == (20, 20, 22)
    assert pigments[0].role == "black"
    assert pigments[1].brand == "Rosco"


@pytest.mark.parametrize(
    "content",
    [
        "id,name\nx,Missing Color\n",
        "id,name,hex\n,No Id,#FFFFFF\n",
        "id,name,hex\nx,Bad Hex,#FFFFF\n",
        "id,name,hex,role\nx,Grey,#808080,grey\n",
        "id,name,r,g,b\nx,Too Bright,300,0,0\n",
        "id,name,hex\nx,One,#000000\nx,Two,#FFFFFF\n",
        "id,name,hex\n",
    ],
)
def test_invalid_catalog_raises(tmp_path, content):
    catalog_file = tmp_path / "bad.csv"
    catalog_file.write_text(content, encoding="utf-8")

    with pytest.raises(CatalogValidationError):
        load_catalog(catalog_file)


def test_unsupported_or_missing_file_raises(tmp_path):
    with pytest.raises(CatalogValidationError):
        load_catalog(tmp_path / "missing.csv")

    other = tmp_path / "catalog.txt"
    other.write_text("id,name,hex\n", encoding="utf-8")
    with pytest.raises(CatalogValidationError):
        load_catalog(other)


def test_builtin_rosco_catalog_tags_white_and_black():
    pigments = load_builtin_catalog("rosco")

    assert len(pigments) == 32
    roles = {p.role: p.id for p in pigments if p.role}
    assert roles == {"white": "5330", "black": "5352"}


def test_builtin_commercial_catalog_brands():
    pigments = load_builtin_catalog("commercial")

    assert brands(pigments) == ["Benjamin Moore", "Sherwin-Williams", "Behr"]
    assert all(p.code for p in pigments)


def test_unknown_builtin_catalog_raises():
    assert builtin_catalog_names() == ["commercial", "rosco"]
    with pytest.raises(CatalogValidationError):
        load_builtin_catalog("pantone")


def test_filter_catalog_keeps_order():
    pigments = load_builtin_catalog("rosco")

    filtered = filter_catalog(pigments, inventory={"5352", "5330", "nope"})

    assert [p.id for p in filtered] == ["5330", "5352"]
    assert filter_catalog(pigments, inventory=[]) == []
    assert filter_catalog(pigments) == pigments
