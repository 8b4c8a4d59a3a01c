"""Tests for the grid configuration model."""

import dataclasses

import pytest

from grounding_engine.errors import InvalidInputError
from grounding_engine.models.grid_config import GridConfig, grid_config_from_mapping
from grounding_engine.models.reference_tables import ConductorMaterial, SoilType


def test_reference_defaults(reference_config):
    cfg = reference_config
    assert cfg.width_m == 70.0
    assert cfg.length_m == 70.0
    assert cfg.rods == 10
    assert cfg.soil is SoilType.CRUSHED_STONE
    assert cfg.conductor is ConductorMaterial.COMMERCIAL_COPPER


def test_derived_geometry(reference_config):
    assert reference_config.area_m2 == 4900.0
    assert reference_config.n_cond_width == 10.0
    assert reference_config.n_cond_length == 10.0
    assert reference_config.n_cond_max == 10.0


def test_area_follows_overrides(reference_config):
    trial = reference_config.with_overrides(width_m=12.0, length_m=5.0)
    assert trial.area_m2 == 60.0
    assert trial.n_cond_max == pytest.approx(12.0 / 7.0)
    # original untouched
    assert reference_config.area_m2 == 4900.0


def test_config_is_immutable(reference_config):
    with pytest.raises(dataclasses.FrozenInstanceError):
        reference_config.length_m = 10.0


@pytest.mark.parametrize(
    "field",
    ["width_m", "length_m", "conductor_spacing_m", "fault_duration_s", "burial_depth_m", "rho1_ohm_m"],
)
def test_non_positive_fields_rejected(field):
    with pytest.raises(InvalidInputError, match=field):
        GridConfig(**{field: 0.0})


@pytest.mark.parametrize("field", ["ambient_temp_c", "max_mesh_temp_c", "layer_coefficient_n"])
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_fields_rejected(field, value):
    with pytest.raises(InvalidInputError, match=field):
        GridConfig(**{field: value})


def test_negative_ambient_temperature_allowed():
    assert GridConfig(ambient_temp_c=-20.0).ambient_temp_c == -20.0


def test_negative_rods_rejected():
    with pytest.raises(InvalidInputError):
        GridConfig(rods=-1)
    with pytest.raises(InvalidInputError):
        GridConfig(rods=2.5)


def test_overrides_are_validated(reference_config):
    with pytest.raises(InvalidInputError):
        reference_config.with_overrides(conductor_spacing_m=-7.0)


def test_to_dict_uses_enum_keys(reference_config):
    d = reference_config.to_dict()
    assert d["soil"] == "crushed_stone"
    assert d["conductor"] == "commercial_copper"
    assert d["rods"] == 10


def _mapping():
    return {
        "grid": {
            "width_m": 40,
            "length_m": 60,
            "burial_depth_m": 0.6,
            "conductor_spacing_m": 5,
            "mesh_diameter_d1_m": 0.1,
            "rods": 4,
        },
        "soil": {"type": "granite", "rho1_ohm_m": 1000, "rho2_ohm_m": 200, "layer_coefficient_n": 0.7},
        "conductor": {"material": 0, "ambient_temp_c": 30, "max_temp_c": 250},
        "fault": {"mesh_current_a": 5000, "duration_s": 1.0},
        "design": {"min_mesh_resistance_ohm": 1.5},
    }


def test_config_from_mapping():
    cfg = grid_config_from_mapping(_mapping())
    assert cfg.area_m2 == 2400.0
    assert cfg.rods == 4
    assert cfg.soil is SoilType.GRANITE
    assert cfg.conductor is ConductorMaterial.SOFT_COPPER
    assert cfg.max_mesh_temp_c == 250.0
    assert cfg.fault_duration_s == 1.0


def test_config_from_mapping_missing_key():
    m = _mapping()
    del m["fault"]["duration_s"]
    with pytest.raises(InvalidInputError, match="fault.duration_s"):
        grid_config_from_mapping(m)


def test_config_from_mapping_bad_values():
    m = _mapping()
    m["grid"]["width_m"] = "wide"
    with pytest.raises(InvalidInputError, match="grid.width_m"):
        grid_config_from_mapping(m)

    m = _mapping()
    m["conductor"]["material"] = 8
    with pytest.raises(InvalidInputError):
        grid_config_from_mapping(m)
