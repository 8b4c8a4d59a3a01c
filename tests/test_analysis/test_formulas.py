"""Golden values for the reference grid (70 m x 70 m, crushed stone, commercial copper)."""

import math

import pytest

from grounding_engine.analysis.conductor_sizing import cable_diameter, cable_section, format_conductor_summary
from grounding_engine.analysis.ground_resistance import ground_resistance, ground_resistance_for_geometry
from grounding_engine.analysis.mesh_factors import ki_factor, km_factor, ks_factor
from grounding_engine.analysis.soil_resistivity import apparent_resistivity, correction_factor
from grounding_engine.analysis.tolerable_voltage import step_voltage_50kg, touch_voltage_50kg
from grounding_engine.errors import InvalidInputError
from grounding_engine.models.reference_tables import ConductorMaterial, SoilType

REL = 1e-9


def test_apparent_resistivity(reference_config):
    alpha, beta, rho_a = apparent_resistivity(reference_config)
    assert alpha == pytest.approx(387.188929886, rel=REL)
    assert beta == pytest.approx(0.16)
    assert rho_a == pytest.approx(1675.0)


def test_correction_factor(reference_config):
    assert correction_factor(reference_config) == pytest.approx(0.930642201835, rel=REL)


def test_correction_factor_uniform_soil(reference_config):
    cfg = reference_config.with_overrides(rho2_ohm_m=reference_config.rho1_ohm_m)
    assert correction_factor(cfg) == pytest.approx(1.0)


def test_tolerable_voltages(reference_config):
    assert step_voltage_50kg(reference_config) == pytest.approx(2912.12158081, rel=REL)
    assert touch_voltage_50kg(reference_config) == pytest.approx(851.066975129, rel=REL)


def test_tolerable_voltages_follow_surface_material(reference_config):
    swamp = reference_config.with_overrides(soil=SoilType.SWAMP)
    assert touch_voltage_50kg(swamp) < touch_voltage_50kg(reference_config)
    # no surface layer contribution -> 1000 ohm body only
    cs = correction_factor(swamp)
    expected = (1000 + 6 * cs * 50.0) * (0.116 / math.sqrt(0.5))
    assert step_voltage_50kg(swamp) == pytest.approx(expected)


def test_longer_fault_lowers_tolerable_voltage(reference_config):
    slow = reference_config.with_overrides(fault_duration_s=2.0)
    assert touch_voltage_50kg(slow) == pytest.approx(touch_voltage_50kg(reference_config) / 2.0)


def test_cable_section_and_diameter(reference_config):
    assert cable_section(reference_config) == pytest.approx(3.25774134111, rel=REL)
    assert cable_diameter(reference_config) == pytest.approx(0.0020366357313, rel=REL)


def test_cable_diameter_identity(reference_config):
    assert cable_diameter(reference_config) == 2 * math.sqrt(cable_section(reference_config) / math.pi) * 0.001


def test_soft_copper_section(reference_config):
    cfg = reference_config.with_overrides(conductor=ConductorMaterial.SOFT_COPPER)
    assert cable_section(cfg) == pytest.approx(3.22697035403, rel=REL)


def test_section_scales_with_current(reference_config):
    doubled = reference_config.with_overrides(mesh_current_a=2400.0)
    assert cable_section(doubled) == pytest.approx(2.0 * cable_section(reference_config))


def test_cable_section_rejects_bad_temperatures(reference_config):
    with pytest.raises(InvalidInputError):
        cable_section(reference_config.with_overrides(max_mesh_temp_c=40.0))
    with pytest.raises(InvalidInputError):
        cable_section(reference_config.with_overrides(ambient_temp_c=-300.0))


def test_conductor_summary(reference_config):
    text = format_conductor_summary(reference_config)
    assert "Copper, commercial hard-drawn" in text
    assert "3.2577 mm^2" in text


def test_mesh_factors(reference_config):
    assert km_factor(reference_config) == pytest.approx(1.15566149883, rel=REL)
    assert ki_factor(reference_config) == pytest.approx(2.124, rel=REL)
    assert ks_factor(reference_config) == pytest.approx(0.452201255231, rel=REL)


def test_km_rejects_degenerate_grid(reference_config):
    tiny = reference_config.with_overrides(width_m=3.0, length_m=3.0)
    with pytest.raises(InvalidInputError):
        km_factor(tiny)


def test_km_rejects_zero_current(reference_config):
    with pytest.raises(InvalidInputError):
        km_factor(reference_config.with_overrides(mesh_current_a=0.0))


def test_ground_resistance(reference_config):
    assert ground_resistance(reference_config) == pytest.approx(8.23023911742, rel=REL)


def test_ground_resistance_geometry_helper_matches(reference_config):
    trial = reference_config.with_overrides(width_m=33.0, length_m=33.0)
    assert ground_resistance(trial) == ground_resistance_for_geometry(400.0, 0.5, 33.0, 33.0)


def test_ground_resistance_length_floor():
    # L < 1 m is treated as 1 m: 1/L term capped at 1
    r = ground_resistance_for_geometry(100.0, 0.5, 10.0, 0.5)
    area = 5.0
    eq1 = 1.0 / math.sqrt(20.0 * area)
    eq2 = 1.0 / (1.0 + 0.5 * math.sqrt(20.0 / area))
    assert r == pytest.approx(100.0 * (1.0 + eq1 * (1.0 + eq2)))


def test_ground_resistance_term_floors():
    # very large area: eq1 floored at 0.001; very deep grid: eq2 floored at 0.001
    r = ground_resistance_for_geometry(1000.0, 1.0e6, 1000.0, 1000.0)
    assert r == pytest.approx(1000.0 * (1.0 / 1000.0 + 0.001 * (1.0 + 0.001)))


def test_formulas_are_idempotent(reference_config):
    fns = [
        correction_factor,
        step_voltage_50kg,
        touch_voltage_50kg,
        cable_section,
        cable_diameter,
        km_factor,
        ki_factor,
        ks_factor,
        ground_resistance,
    ]
    for fn in fns:
        assert fn(reference_config) == fn(reference_config)
