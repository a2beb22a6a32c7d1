import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from geodist.errors import GeometryTooLargeError, InvalidGeometryError, UnsupportedGeometryError
from geodist.middleware import RequestLoggingMiddleware
from geodist.monitoring import get_metrics
from geodist.service.models import DistanceRequest, DistanceResponse
from geodist.service.service import compute_distance
from settings import get_settings

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
def unhandled_exception_handler(request: Request, exc: Exception):
    """Return consistent JSON error for unhandled exceptions (500). Skip validation/HTTP errors."""
    from fastapi.exceptions import RequestValidationError
    if isinstance(exc, (HTTPException, RequestValidationError)):
        raise exc
    logger.exception("telemetry unhandled_exception path=%s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred. Please try again later."},
    )


# Last added = outermost: request logging, then rate limiting, then CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggingMiddleware)


@app.get("/favicon.ico", include_in_schema=False)
@limiter.exempt
def favicon(request: Request):
    return Response(status_code=204)


@app.get("/health")
@limiter.exempt
def health(request: Request):
    logger.info("telemetry route=health")
    return {"status": "ok"}


@app.get("/metrics")
@limiter.exempt
def metrics(request: Request):
    """Request counts by status bucket, distance computations by tier, uptime."""
    return get_metrics()


@app.post("/distance", response_model=DistanceResponse)
def post_distance(request: Request, body: DistanceRequest):
    """Distance in meters between two GeoJSON geometries."""
    tier = body.tier or settings.default_tier
    try:
        a = body.a.to_geometry()
        b = body.b.to_geometry()
    except ValidationError as e:
        # Position ranges, ring closure and minimum sizes are checked when geometries are built
        raise HTTPException(status_code=400, detail=f"Invalid geometry: {e.errors()[0]['msg']}") from e

    try:
        result = compute_distance(a, b, tier=tier, max_positions=settings.max_positions)
    except GeometryTooLargeError as e:
        logger.warning("telemetry distance_too_large count=%s limit=%s", e.count, e.limit)
        raise HTTPException(status_code=413, detail=str(e)) from e
    except InvalidGeometryError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except UnsupportedGeometryError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return DistanceResponse(distance_m=result, tier=tier, a_type=type(a).__name__, b_type=type(b).__name__)
