import os
from typing import Any, Dict

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from grounding_engine.cli import apply_defaults, build_result_packet, run_design, validate_cfg
from grounding_engine.errors import GridNotSizableError, InvalidInputError
from grounding_engine.models.reference_tables import conductor_table_rows, soil_table_rows


APP_NAME = "ieee80-grounding-backend"


app = FastAPI(title=APP_NAME, version="0.1.0")

# CORS: set CORS_ORIGINS="https://your-frontend-domain.com,https://another.com"
cors_env = os.getenv("CORS_ORIGINS", "")
if cors_env.strip():
    origins = [o.strip() for o in cors_env.split(",") if o.strip()]
else:
    origins = ["http://localhost:5173", "http://127.0.0.1:5173"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"ok": True, "service": APP_NAME}


@app.get("/api/tables")
def tables():
    return {"soil": soil_table_rows(), "conductor": conductor_table_rows()}


@app.post("/api/evaluate")
def evaluate(config: Dict[str, Any] = Body(...)):
    """
    Input: JSON body shaped like the YAML config (any subset; merged over defaults).
    Runs the design check in-process and returns the results.json packet.
    """
    try:
        cfg = apply_defaults(config)
        validate_cfg(cfg)
        gc, design, curve = run_design(cfg)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except GridNotSizableError as e:
        raise HTTPException(
            status_code=409,
            detail={
                "message": str(e),
                "target_ohm": e.target_ohm,
                "max_side_m": e.max_side_m,
                "last_resistance_ohm": e.last_resistance_ohm,
            },
        )

    return build_result_packet(cfg=cfg, gc=gc, design=design, curve=curve)
