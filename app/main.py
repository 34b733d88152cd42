"""FastAPI application setup for Clima Lookup."""

from fastapi import FastAPI

from .api import router as api_router

app = FastAPI(title="Clima Lookup")


@app.get("/healthz")
def healthz():
    """Liveness probe."""
    return {"status": "ok"}


# API routes
app.include_router(api_router, prefix="/v1")
