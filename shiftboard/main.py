import logging

from fastapi import FastAPI
from shiftboard.api.routes import schedules
from shiftboard.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title="Shiftboard API", version="0.1.0")

app.include_router(schedules.router, prefix="/api/v1")


@app.get("/health")
def health_check():
    return {"status": "ok"}
