"""FastAPI routes for the Powerball analysis and prediction service."""

from fastapi import FastAPI, HTTPException, Depends, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
from datetime import date, datetime
import logging

from .schemas import (
    AnalysisRequest, AnalysisResponse, PredictionRequest,
    PredictionResponse, PredictionSetSchema, ErrorResponse
)
from .. import __version__
from ..analysis.statistics import StatisticsAnalyzer
from ..config.settings import settings
from ..exceptions import (
    DataSourceError, EmptyInputError, RecordOrderError, RecordValidationError
)
from ..predictions.predictor_engine import PredictionRun, predictor_engine
from ..scraping.sources import DrawingSource, build_default_source
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Powerball Insights",
    description="Frequency analysis and weighted number predictions for Powerball drawings",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Rate limiting
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

RATE_LIMIT = f"{settings.rate_limit_requests_per_minute}/minute"

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in (settings.cors_origins or "").split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, detail: str) -> JSONResponse:
    body = ErrorResponse(detail=detail, status_code=status_code)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@app.exception_handler(EmptyInputError)
@app.exception_handler(RecordValidationError)
@app.exception_handler(RecordOrderError)
async def invalid_drawings_handler(request: Request, exc: Exception):
    """Drawings that cannot be analyzed are a client error."""
    logger.warning(f"Rejected drawings on {request.url.path}: {exc}")
    return _error_response(422, str(exc))


@app.exception_handler(DataSourceError)
async def data_source_handler(request: Request, exc: DataSourceError):
    """Upstream drawing source failures."""
    logger.error(f"Drawing source failed: {exc}")
    return _error_response(502, str(exc))


def get_drawing_source(
    start: Optional[date] = Query(None, description="First drawing date (YYYY-MM-DD)"),
    end: Optional[date] = Query(None, description="Last drawing date (YYYY-MM-DD), today by default")
) -> DrawingSource:
    """Drawing source used by the latest-predictions endpoint."""
    try:
        return build_default_source(settings, start=start, end=end)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _prediction_response(run: PredictionRun, source: str) -> PredictionResponse:
    return PredictionResponse(
        source=source,
        seed=run.seed,
        analysis=AnalysisResponse.from_snapshot(run.snapshot),
        predictions=[PredictionSetSchema.from_prediction(p) for p in run.predictions]
    )


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint for health check."""
    return {
        "message": "Powerball Insights API",
        "status": "running",
        "version": __version__
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "engine": predictor_engine.get_engine_status()
    }


@app.post("/analysis", response_model=AnalysisResponse, tags=["Analysis"])
@limiter.limit(RATE_LIMIT)
async def analyze_drawings(request: Request, payload: AnalysisRequest):
    """Analyze a newest-first list of drawings."""
    snapshot = StatisticsAnalyzer(settings).analyze(payload.to_records())
    return AnalysisResponse.from_snapshot(snapshot)


@app.post("/predictions", response_model=PredictionResponse, tags=["Predictions"])
@limiter.limit(RATE_LIMIT)
async def predict_from_drawings(request: Request, payload: PredictionRequest):
    """Analyze the submitted drawings and generate prediction sets from them."""
    records = payload.to_records()
    try:
        run = predictor_engine.predict(records, count=payload.count, seed=payload.seed)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _prediction_response(run, source="request")


@app.get("/predictions/latest", response_model=PredictionResponse, tags=["Predictions"])
@limiter.limit(RATE_LIMIT)
def predict_latest(
    request: Request,
    count: Optional[int] = Query(None, ge=0, description="Number of prediction sets"),
    seed: Optional[int] = Query(None, ge=0, description="Seed for reproducible predictions"),
    source: DrawingSource = Depends(get_drawing_source)
):
    """Load drawings in [start, end] from the configured source and predict."""
    try:
        run = predictor_engine.predict_from_source(source, count=count, seed=seed)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _prediction_response(run, source=source.describe())
