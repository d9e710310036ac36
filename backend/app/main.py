from __future__ import annotations

import logging
import random

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from exam_seating.config import DEFAULT_COLS, DEFAULT_COUNTS, DEFAULT_ROWS, SolverSettings, log_level
from exam_seating.export import seats_to_csv
from exam_seating.labels import SeatGrid
from exam_seating.render import render_svg
from exam_seating.solver import CountMismatchError, SearchExhaustedError, generate_seating

from .schemas import ArrangementRequest, ArrangementResponse, DefaultsResponse

logger = logging.getLogger(__name__)

app = FastAPI(title="Exam Seating API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup() -> None:
    logging.basicConfig(level=log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _generate(payload: ArrangementRequest) -> SeatGrid:
    rng = random.Random(payload.seed) if payload.seed is not None else None
    try:
        return generate_seating(
            payload.rows,
            payload.cols,
            payload.counts,
            attempt_limit=payload.attempt_limit,
            max_retries=payload.max_retries,
            rng=rng,
        )
    except CountMismatchError as e:
        raise HTTPException(status_code=400, detail={"kind": e.kind, "message": str(e)}) from e
    except SearchExhaustedError as e:
        logger.info("arrangement request exhausted: %s", e)
        raise HTTPException(status_code=422, detail={"kind": e.kind, "message": str(e)}) from e


@app.get("/health")
def health() -> dict:
    return {"ok": True}


@app.get("/defaults", response_model=DefaultsResponse)
def defaults() -> dict:
    settings = SolverSettings.from_env()
    return {
        "rows": DEFAULT_ROWS,
        "cols": DEFAULT_COLS,
        "counts": dict(DEFAULT_COUNTS),
        "attempt_limit": settings.attempt_limit,
        "max_retries": settings.max_retries,
    }


@app.post("/arrangements", response_model=ArrangementResponse)
def create_arrangement(payload: ArrangementRequest) -> dict:
    return _generate(payload).to_dict()


@app.post("/arrangements.csv")
def export_arrangement_csv(payload: ArrangementRequest) -> Response:
    grid = _generate(payload)
    return Response(
        content=seats_to_csv(grid),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="seating-chart.csv"'},
    )


@app.post("/arrangements.svg")
def export_arrangement_svg(payload: ArrangementRequest) -> Response:
    grid = _generate(payload)
    return Response(
        content=render_svg(grid),
        media_type="image/svg+xml",
        headers={"Content-Disposition": 'attachment; filename="seating-chart.svg"'},
    )
