"""
Servo Playground API - FastAPI Application

Run with: uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from servo import __version__
from api.routes.health import router as health_router
from api.routes.execute import router as execute_router
from api.routes.parse import router as parse_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Servo Playground API starting...")
    yield
    logger.info("Servo Playground API shutting down...")


app = FastAPI(
    title="Servo Playground API",
    description="Tokenize, parse and evaluate Servo source over HTTP",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, tags=["Health"])
app.include_router(health_router, prefix="/api/v1", tags=["Health"])
app.include_router(parse_router, prefix="/api/v1", tags=["Frontend"])
app.include_router(execute_router, prefix="/api/v1", tags=["Execution"])


@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "name": "Servo Playground API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
