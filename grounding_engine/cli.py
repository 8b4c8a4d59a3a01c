"""
CLI entrypoint for the IEEE Std 80-2013 grounding grid design check.

The engine stays pure: this module is orchestration + deterministic JSON packaging only.

Usage:
  python -m grounding_engine.cli --config configs/default_grid.yaml --out outputs/

Outputs:
  - outputs/report.html (if enabled)
  - outputs/resistance_vs_side.png (if report and curve enabled; produced by report generator)
  - outputs/results.json (canonical result packet)

Exit codes: 0 ok, 1 grid not sizable, 2 config/input error.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import yaml

from grounding_engine.analysis.design_check import GridDesignReport, evaluate_grid_design
from grounding_engine.analysis.grid_sizing import MAX_GRID_SIDE_M, check_side_bound, resistance_curve
from grounding_engine.errors import GridNotSizableError, InvalidInputError
from grounding_engine.models.grid_config import GridConfig, grid_config_from_mapping
from grounding_engine.models.reference_tables import lookup_conductor, lookup_soil
from grounding_engine.report.html_report import generate_html_report

SCHEMA_VERSION = "ground.v1"

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def apply_defaults(cfg: Dict[str, Any]) -> Dict[str, Any]:
    d = GridConfig()
    defaults: Dict[str, Any] = {
        "grid": {
            "width_m": d.width_m,
            "length_m": d.length_m,
            "burial_depth_m": d.burial_depth_m,
            "conductor_spacing_m": d.conductor_spacing_m,
            "mesh_diameter_d1_m": d.mesh_diameter_d1_m,
            "rods": d.rods,
        },
        "soil": {
            "type": d.soil.name.lower(),
            "rho1_ohm_m": d.rho1_ohm_m,
            "rho2_ohm_m": d.rho2_ohm_m,
            "layer_coefficient_n": d.layer_coefficient_n,
        },
        "conductor": {
            "material": d.conductor.name.lower(),
            "ambient_temp_c": d.ambient_temp_c,
            "max_temp_c": d.max_mesh_temp_c,
        },
        "fault": {"mesh_current_a": d.mesh_current_a, "duration_s": d.fault_duration_s},
        "design": {"min_mesh_resistance_ohm": d.min_mesh_resistance_ohm, "max_side_m": MAX_GRID_SIDE_M},
        "report": {"enabled": True, "report_name": "Substation Grounding Grid Design Check (IEEE Std 80-2013)"},
        "sweeps": {"resistance_curve": {"enabled": True, "max_side_m": None}},
        "tool": {"name": "ieee80-grounding", "version": "0.1.0"},
    }
    return _deep_merge(defaults, cfg)


def validate_cfg(cfg: Dict[str, Any]) -> None:
    for section in ("grid", "soil", "conductor", "fault", "design", "report", "sweeps", "tool"):
        if not isinstance(cfg.get(section), dict):
            raise InvalidInputError(f"Config section '{section}' must be a mapping.")

    check_side_bound(cfg["design"].get("max_side_m"), "design.max_side_m")

    curve = cfg["sweeps"].get("resistance_curve")
    if not isinstance(curve, dict):
        raise InvalidInputError("sweeps.resistance_curve must be a mapping")
    if curve.get("max_side_m") is not None:
        check_side_bound(curve["max_side_m"], "sweeps.resistance_curve.max_side_m")


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError("Config YAML must be a mapping (top-level dict).")
    return data


def _write_json(path: Path, obj: Dict[str, Any]) -> None:
    path.write_text(json.dumps(obj, indent=2, sort_keys=False), encoding="utf-8")


def _format_inputs_block(gc: GridConfig) -> Dict[str, str]:
    return {
        "Grid (W x L)": f"{gc.width_m:.1f} m x {gc.length_m:.1f} m",
        "Burial depth": f"{gc.burial_depth_m:.2f} m",
        "Conductor spacing": f"{gc.conductor_spacing_m:.2f} m",
        "Ground rods": f"{gc.rods}",
        "Soil rho1 / rho2": f"{gc.rho1_ohm_m:.1f} / {gc.rho2_ohm_m:.1f} ohm-m",
        "Surface material": f"{lookup_soil(gc.soil).label} ({lookup_soil(gc.soil).resistivity_ohm_m:.0f} ohm-m)",
        "Conductor material": lookup_conductor(gc.conductor).label,
        "Fault current": f"{gc.mesh_current_a:.1f} A",
        "Fault duration": f"{gc.fault_duration_s:.3f} s",
        "Ambient / max temp": f"{gc.ambient_temp_c:.1f} / {gc.max_mesh_temp_c:.1f} degC",
        "Target Rg": f"{gc.min_mesh_resistance_ohm:.3f} ohm",
    }


def _curve_side_limit(cfg: Dict[str, Any], design: GridDesignReport) -> float:
    configured = cfg["sweeps"]["resistance_curve"].get("max_side_m")
    if configured is not None:
        return float(configured)
    return min(MAX_GRID_SIDE_M, max(50.0, float(np.ceil(1.5 * design.grid_side_m))))


def run_design(cfg: Dict[str, Any]) -> Tuple[GridConfig, GridDesignReport, Optional[Tuple[np.ndarray, np.ndarray]]]:
    """Evaluate a merged config mapping. Errors from the engine propagate."""
    gc = grid_config_from_mapping(cfg)
    design = evaluate_grid_design(gc, max_side_m=float(cfg["design"]["max_side_m"]))

    curve = None
    if bool(cfg["sweeps"].get("resistance_curve", {}).get("enabled", True)):
        curve = resistance_curve(gc, max_side_m=_curve_side_limit(cfg, design))
    return gc, design, curve


def build_result_packet(
    *,
    cfg: Dict[str, Any],
    gc: GridConfig,
    design: GridDesignReport,
    curve: Optional[Tuple[np.ndarray, np.ndarray]],
    out_dir: Optional[str] = None,
    report_enabled: bool = False,
) -> Dict[str, Any]:
    artifacts: Dict[str, Any] = {"report_html": None, "plots": []}
    if out_dir is not None:
        artifacts["raw"] = [{"name": "results_json", "path": str(Path(out_dir) / "results.json")}]
        if report_enabled:
            artifacts["report_html"] = str(Path(out_dir) / "report.html")
            if curve is not None:
                artifacts["plots"].append(
                    {"name": "resistance_vs_side", "path": str(Path(out_dir) / "resistance_vs_side.png")}
                )

    series: Dict[str, Any] = {}
    if curve is not None:
        sides, rg = curve
        series["resistance_vs_side"] = {
            "x_name": "Grid side (m)",
            "y_name": "Rg (ohm)",
            "points": [[float(s), float(r)] for s, r in zip(sides, rg)],
        }

    return {
        "schema_version": SCHEMA_VERSION,
        "generated_utc": _utc_now_iso(),
        "tool": {
            "name": cfg["tool"].get("name", "ieee80-grounding"),
            "version": cfg["tool"].get("version", "0.1.0"),
        },
        "inputs": gc.to_dict(),
        "inputs_block": _format_inputs_block(gc),
        "summary": {
            "safe": design.safe,
            "risk_level": design.risk_level,
            "touch_pass": design.touch_pass,
            "step_pass": design.step_pass,
            "gpr_below_touch": design.gpr_below_touch,
            "interpretation": list(design.interpretation),
        },
        "results": design.to_dict(),
        "series": series,
        "artifacts": artifacts,
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="grounding_engine.cli",
        description="IEEE Std 80-2013 grounding grid design check: CLI + results.json (mirrors report.html)",
    )
    parser.add_argument("--config", required=True, help="Path to YAML config (e.g., configs/default_grid.yaml)")
    parser.add_argument("--out", required=True, help="Output directory (e.g., outputs/)")
    parser.add_argument("--no-report", action="store_true", help="Disable HTML report generation")
    parser.add_argument("--verbose", action="store_true", help="Log engine progress")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    cfg_path = Path(args.config)
    out_dir = str(Path(args.out))

    if not cfg_path.exists():
        print(f"Config not found: {cfg_path}")
        return 2

    os.makedirs(out_dir, exist_ok=True)

    try:
        cfg = apply_defaults(_load_yaml(cfg_path))
        validate_cfg(cfg)
        if args.no_report:
            cfg["report"]["enabled"] = False
        gc, design, curve = run_design(cfg)
    except (yaml.YAMLError, ValueError) as e:
        # InvalidInputError is a ValueError
        print(f"Config error: {e}")
        return 2
    except GridNotSizableError as e:
        print(f"Grid not sizable: {e}")
        return 1

    logger.info("Design evaluated: side=%.0f m, risk=%s", design.grid_side_m, design.risk_level)

    report_cfg = cfg["report"]
    report_enabled = bool(report_cfg.get("enabled", True))
    if report_enabled:
        generate_html_report(
            out_dir=out_dir,
            report_name=str(report_cfg.get("report_name", "Substation Grounding Grid Design Check")),
            inputs_block=_format_inputs_block(gc),
            design=design,
            curve=curve,
        )

    packet = build_result_packet(
        cfg=cfg,
        gc=gc,
        design=design,
        curve=curve,
        out_dir=out_dir,
        report_enabled=report_enabled,
    )
    _write_json(Path(out_dir) / "results.json", packet)

    print(f"Wrote: {Path(out_dir) / 'results.json'}")
    if report_enabled:
        print(f"Wrote: {Path(out_dir) / 'report.html'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
