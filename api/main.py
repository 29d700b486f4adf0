"""
FastAPI application entrypoint.

    uvicorn api.main:app
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api import routes
from api.routes import router

logging.basicConfig(level=routes.settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # release the camera and cancel the detection timer on shutdown
    routes.session.close()
    await routes.session.scheduler.wait_idle()


app = FastAPI(title="Live Face Expression API", version="1.0.0", lifespan=lifespan)
app.include_router(router)


@app.get("/health")
def health() -> dict:
    """
    Health check endpoint.

    Returns:
        dict: Simple status payload.
    """
    return {"status": "ok"}
