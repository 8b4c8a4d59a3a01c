"""Tests for the soil and conductor reference tables."""

import pytest

from grounding_engine.errors import InvalidInputError
from grounding_engine.models.reference_tables import (
    ConductorMaterial,
    SoilType,
    conductor_material_from_key,
    conductor_table_rows,
    lookup_conductor,
    lookup_soil,
    soil_table_rows,
    soil_type_from_key,
)


def test_soil_lookup_by_enum():
    row = lookup_soil(SoilType.CRUSHED_STONE)
    assert row.label == "Crushed stone"
    assert row.resistivity_ohm_m == 3000.0


def test_soil_table_covers_all_categories():
    assert len(soil_table_rows()) == len(SoilType) == 9
    assert lookup_soil(SoilType.SWAMP).resistivity_ohm_m == 50.0
    assert lookup_soil(SoilType.GRANITE).resistivity_ohm_m == 10000.0


def test_conductor_lookup_commercial_copper():
    c = lookup_conductor(ConductorMaterial.COMMERCIAL_COPPER)
    assert c.alpha_r == 0.00381
    assert c.k0 == 242.0
    assert c.rho_r_uohm_cm == 1.78
    assert c.tcap == 3.4


def test_conductor_table_has_eight_materials():
    assert len(conductor_table_rows()) == len(ConductorMaterial) == 8


def test_last_valid_index_succeeds():
    assert lookup_soil(8).label == "Undefined"
    assert lookup_conductor(7).label == "Stainless steel, 304"


def test_index_one_past_end_fails():
    with pytest.raises(InvalidInputError):
        lookup_soil(9)
    with pytest.raises(InvalidInputError):
        lookup_conductor(8)


def test_negative_and_non_int_index_fail():
    with pytest.raises(InvalidInputError):
        lookup_soil(-1)
    with pytest.raises(InvalidInputError):
        lookup_conductor(1.0)
    with pytest.raises(InvalidInputError):
        lookup_conductor(True)


def test_keys_resolve_by_name_and_index():
    assert soil_type_from_key("crushed_stone") is SoilType.CRUSHED_STONE
    assert soil_type_from_key(" Granite ") is SoilType.GRANITE
    assert soil_type_from_key(2) is SoilType.HUMUS
    assert conductor_material_from_key("soft_copper") is ConductorMaterial.SOFT_COPPER
    assert conductor_material_from_key(ConductorMaterial.ZINC_COATED_STEEL) is ConductorMaterial.ZINC_COATED_STEEL


def test_unknown_key_fails():
    with pytest.raises(InvalidInputError, match="Unknown soil type"):
        soil_type_from_key("bedrock")
    with pytest.raises(InvalidInputError, match="Unknown conductor material"):
        conductor_material_from_key("gold")
