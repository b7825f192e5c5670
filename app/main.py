import logging
import os

from fastapi import FastAPI

from app.database import Base, engine
from app.routers.catalog import router as catalog_router
from app.routers.config import router as config_router

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format=LOG_FORMAT,
)

# Ensure database tables exist
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Lifelog Gallery")

app.include_router(config_router)
app.include_router(catalog_router)

__all__ = ["app"]
