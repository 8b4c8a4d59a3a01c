"""
IEEE Std 80-2013 reference tables (soil resistivity + conductor material constants)

Two fixed, process-wide lookup tables:
- Soil: typical resistivity per soil category (ohm-m). Used as the surface-layer
  resistivity rho_s in the tolerable step/touch voltage equations.
- Conductor: material constants from Table 1 of the standard, used for conductor sizing.

Rows are selected by enum member (SoilType / ConductorMaterial). Integer lookup is kept
for config files and the HTTP surface, and is bounds-checked.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple, Union

from grounding_engine.errors import InvalidInputError


class SoilType(Enum):
    SWAMP = 0
    MUD = 1
    HUMUS = 2
    CLAY_SAND = 3
    SILICA_SAND = 4
    CRUSHED_STONE = 5
    LIMESTONE = 6
    GRANITE = 7
    UNDEFINED = 8


class ConductorMaterial(Enum):
    SOFT_COPPER = 0
    COMMERCIAL_COPPER = 1
    COPPER_CLAD_STEEL = 2
    ALUMINUM_CLAD_STEEL = 3
    STEEL_1020 = 4
    STAINLESS_CLAD_STEEL = 5
    ZINC_COATED_STEEL = 6
    STAINLESS_STEEL_304 = 7


@dataclass(frozen=True)
class SoilRecord:
    label: str
    resistivity_ohm_m: float


@dataclass(frozen=True)
class ConductorRecord:
    """
    alpha_r: thermal coefficient of resistivity at reference temperature (1/degC)
    k0: 1/alpha_0, or (1/alpha_r) - Tr (degC)
    rho_r_uohm_cm: resistivity of the conductor at reference temperature (micro-ohm-cm)
    tcap: thermal capacity per unit volume (J/(cm^3 degC))
    """
    label: str
    alpha_r: float
    k0: float
    rho_r_uohm_cm: float
    tcap: float


_SOIL_TABLE: Tuple[SoilRecord, ...] = (
    SoilRecord("Swamp", 50.0),
    SoilRecord("Mud", 100.0),
    SoilRecord("Humus", 150.0),
    SoilRecord("Clay sand", 200.0),
    SoilRecord("Silica sand", 1000.0),
    SoilRecord("Crushed stone", 3000.0),
    SoilRecord("Limestone", 5000.0),
    SoilRecord("Granite", 10000.0),
    SoilRecord("Undefined", 3000.0),
)

# Table 1 - IEEE Std 80-2013
_CONDUCTOR_TABLE: Tuple[ConductorRecord, ...] = (
    ConductorRecord("Copper, annealed soft-drawn", 0.00393, 234.0, 1.72, 3.4),
    ConductorRecord("Copper, commercial hard-drawn", 0.00381, 242.0, 1.78, 3.4),
    ConductorRecord("Copper-clad steel wire", 0.00378, 245.0, 10.1, 3.8),
    ConductorRecord("Aluminum-clad steel wire", 0.0036, 258.0, 8.48, 3.561),
    ConductorRecord("Steel, 1020", 0.00377, 245.0, 15.9, 3.8),
    ConductorRecord("Stainless-clad steel rod", 0.00377, 245.0, 17.5, 4.4),
    ConductorRecord("Zinc-coated steel rod", 0.0032, 293.0, 20.1, 3.9),
    ConductorRecord("Stainless steel, 304", 0.0013, 749.0, 72.0, 4.0),
)


def _resolve_index(selector: Union[int, Enum], enum_cls, table: tuple, what: str) -> int:
    if isinstance(selector, enum_cls):
        return selector.value
    if isinstance(selector, bool) or not isinstance(selector, int):
        raise InvalidInputError(f"{what} selector must be a {enum_cls.__name__} or int index, got {selector!r}.")
    if selector < 0 or selector >= len(table):
        raise InvalidInputError(f"{what} index {selector} out of range [0, {len(table) - 1}].")
    return selector


def lookup_soil(selector: Union[int, SoilType]) -> SoilRecord:
    return _SOIL_TABLE[_resolve_index(selector, SoilType, _SOIL_TABLE, "Soil")]


def lookup_conductor(selector: Union[int, ConductorMaterial]) -> ConductorRecord:
    return _CONDUCTOR_TABLE[_resolve_index(selector, ConductorMaterial, _CONDUCTOR_TABLE, "Conductor")]


def soil_type_from_key(key: Union[str, int, SoilType]) -> SoilType:
    """Accept an enum member, table index, or enum name (case-insensitive, e.g. 'crushed_stone')."""
    if isinstance(key, SoilType):
        return key
    if isinstance(key, str):
        try:
            return SoilType[key.strip().upper()]
        except KeyError:
            raise InvalidInputError(
                f"Unknown soil type '{key}'. Available: {[s.name.lower() for s in SoilType]}"
            ) from None
    return SoilType(_resolve_index(key, SoilType, _SOIL_TABLE, "Soil"))


def conductor_material_from_key(key: Union[str, int, ConductorMaterial]) -> ConductorMaterial:
    if isinstance(key, ConductorMaterial):
        return key
    if isinstance(key, str):
        try:
            return ConductorMaterial[key.strip().upper()]
        except KeyError:
            raise InvalidInputError(
                f"Unknown conductor material '{key}'. Available: {[c.name.lower() for c in ConductorMaterial]}"
            ) from None
    return ConductorMaterial(_resolve_index(key, ConductorMaterial, _CONDUCTOR_TABLE, "Conductor"))


def soil_table_rows() -> List[Dict[str, object]]:
    return [
        {"key": s.name.lower(), "index": s.value, "label": r.label, "resistivity_ohm_m": r.resistivity_ohm_m}
        for s, r in zip(SoilType, _SOIL_TABLE)
    ]


def conductor_table_rows() -> List[Dict[str, object]]:
    return [
        {
            "key": c.name.lower(),
            "index": c.value,
            "label": r.label,
            "alpha_r": r.alpha_r,
            "k0": r.k0,
            "rho_r_uohm_cm": r.rho_r_uohm_cm,
            "tcap": r.tcap,
        }
        for c, r in zip(ConductorMaterial, _CONDUCTOR_TABLE)
    ]
