"""
WinMix Match Predictor - FastAPI Application

Wires the prediction, algorithm and team routers into one app together
with CORS, error mapping and the health endpoints.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from winmix import __version__
from winmix.config import CORS_ORIGINS, MATCHES_FILE, PORT
from winmix.api.routes import algorithms, matches, predictions, statistics, teams
from winmix.application.dtos.dtos import HealthResponseDTO, ErrorResponseDTO
from winmix.domain.exceptions import (
    DataSourceException,
    InvalidFixtureException,
    TeamNotFoundException,
    UnknownAlgorithmException,
)
from winmix.utils.log_config import configure_logging
from winmix.utils.time_utils import get_current_time

configure_logging(force=True)
logger = logging.getLogger(__name__)


# Application metadata
APP_TITLE = "WinMix Match Predictor"
APP_DESCRIPTION = """
**Football Match Prediction API**

Predicts football fixtures from historical results using seven
heuristic algorithms: head-to-head form, attack/defense analysis,
Poisson scorelines, ELO ratings, a weighted ensemble, a rule-based
random forest and seasonal momentum.

## Each Prediction Carries

- 1 / X / 2 outcome probabilities (summing to 100)
- Expected goals per side
- Both-teams-to-score and over 1.5 / 2.5 / 3.5 goal probabilities
- A confidence score between 0 and 1

---
**Educational purposes only** - no claim of predictive accuracy
"""
APP_VERSION = __version__

# Local frontends during development; extra origins come from CORS_ORIGINS
DEV_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{APP_TITLE} {APP_VERSION} starting")

    if MATCHES_FILE:
        logger.info(f"Match history loaded from file {MATCHES_FILE}")
    else:
        from winmix.api.dependencies import get_data_source
        get_data_source().create_tables()
        logger.info("Match history served from the SQL store")

    yield

    logger.info(f"{APP_TITLE} stopped")


app = FastAPI(
    title=APP_TITLE,
    description=APP_DESCRIPTION,
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=sorted(set(DEV_ORIGINS + CORS_ORIGINS)),
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


def _error_response(status_code: int, error: str, exc: Exception, details: dict = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponseDTO(error=error, message=str(exc), details=details).model_dump(),
    )


# Exception handlers
@app.exception_handler(UnknownAlgorithmException)
async def unknown_algorithm_handler(request: Request, exc: UnknownAlgorithmException):
    return _error_response(400, "unknown_algorithm", exc, {"algorithm": exc.algorithm})


@app.exception_handler(InvalidFixtureException)
async def invalid_fixture_handler(request: Request, exc: InvalidFixtureException):
    return _error_response(400, "invalid_fixture", exc)


@app.exception_handler(TeamNotFoundException)
async def team_not_found_handler(request: Request, exc: TeamNotFoundException):
    return _error_response(404, "team_not_found", exc, {"team": exc.team})


@app.exception_handler(DataSourceException)
async def data_source_handler(request: Request, exc: DataSourceException):
    logger.error(f"Data source failure on {request.url.path}: {exc}")
    return _error_response(503, "data_source_unavailable", exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponseDTO(
            error="internal_server_error",
            message="The prediction service failed unexpectedly",
            details={"path": request.url.path},
        ).model_dump(),
    )


@app.get(
    "/health",
    response_model=HealthResponseDTO,
    tags=["Health"],
    summary="Health check",
    description="Liveness check; does not touch the match history.",
)
async def health_check() -> HealthResponseDTO:
    return HealthResponseDTO(
        status="healthy",
        version=APP_VERSION,
        timestamp=get_current_time(),
    )


@app.get(
    "/",
    tags=["Root"],
    summary="Service index",
    description="Name, version and the available endpoints.",
)
async def root():
    return {
        "name": APP_TITLE,
        "version": APP_VERSION,
        "documentation": "/docs",
        "health": "/health",
        "endpoints": {
            "predictions": "/api/v1/predictions?home={home}&away={away}&algorithm={algorithm}",
            "batch": "/api/v1/predictions/batch",
            "algorithms": "/api/v1/algorithms",
            "teams": "/api/v1/teams",
            "matches": "/api/v1/matches?limit={limit}&offset={offset}&season={season}&team={team}",
            "statistics": "/api/v1/statistics",
        },
    }


app.include_router(predictions.router, prefix="/api/v1")
app.include_router(algorithms.router, prefix="/api/v1")
app.include_router(teams.router, prefix="/api/v1")
app.include_router(matches.router, prefix="/api/v1")
app.include_router(statistics.router, prefix="/api/v1")


def run():
    """Serve the API with uvicorn on PORT."""
    import uvicorn

    uvicorn.run("winmix.api.main:app", host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    run()
