"""
api/server.py
-------------
FastAPI application entry point.

Run dev server:
    cd backend
    uvicorn api.server:app --reload --port 8000

Endpoints:
    GET  /v1/health
    POST /v1/context/build
    POST /v1/context/suggestions
"""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from api.routes import context, health

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="Trip Context Engine API",
    version="1.0.0",
    description=(
        "Derives a normalised, enriched itinerary context (schedule conflicts, "
        "free time, meals, weather suitability, budget, progress and plan issues) "
        "for the travel assistant and UI."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# Allow the web frontend (any origin during development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router,  prefix="/v1",         tags=["Health"])
app.include_router(context.router, prefix="/v1/context", tags=["Context"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.server:app", host=config.SERVER_HOST, port=config.SERVER_PORT, reload=True)
