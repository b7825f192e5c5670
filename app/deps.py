from collections.abc import Generator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.catalog import CatalogBuilder
from app.credentials import CredentialStore, SqlCredentialStore
from app.dao import StoreConfigDAO
from app.database import SessionLocal
from app.gallery import CatalogHolder
from app.settings import GallerySettings

_holder = CatalogHolder()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session and closes it when done.
    Yields:
        Session: SQLAlchemy database session
    """
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache
def get_settings() -> GallerySettings:
    return GallerySettings.from_env()


def get_credential_store(
    db: Annotated[Session, Depends(get_db)],
) -> CredentialStore:
    return SqlCredentialStore(StoreConfigDAO(db))


def get_catalog_builder(
    settings: Annotated[GallerySettings, Depends(get_settings)],
) -> CatalogBuilder:
    return CatalogBuilder(settings)


def get_catalog_holder() -> CatalogHolder:
    """The process-wide holder of the most recent catalog."""
    return _holder
