"""FastAPI application entry point."""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from api.routes import analysis, history, simulation
from config import config
from core.errors import InvalidConfigurationError

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[f"{config.rate_limit.requests_per_minute}/minute"],
)


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


def _invalid_configuration_handler(request: Request, exc: InvalidConfigurationError) -> JSONResponse:
    """Report simulation parameters that cannot be run."""
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


app = FastAPI(
    title="Baccarat Tracker",
    description="Outcome tracking, next-hand estimation and staking simulations",
    version="0.1.0",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(InvalidConfigurationError, _invalid_configuration_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors.allowed_origins,
    allow_credentials=config.cors.allow_credentials,
    allow_methods=config.cors.allow_methods,
    allow_headers=config.cors.allow_headers,
)


@app.get("/api/health")
@limiter.limit(f"{config.rate_limit.requests_per_minute}/minute")
async def health_check(request: Request) -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(analysis.router, prefix="/api/analysis", tags=["analysis"])
app.include_router(history.router, prefix="/api/history", tags=["history"])
app.include_router(simulation.router, prefix="/api/simulation", tags=["simulation"])


def main() -> None:
    """Serve the API with uvicorn."""
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
