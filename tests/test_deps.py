"""Tests for dependency injection utilities."""

import contextlib

from sqlalchemy.orm import Session

from app.catalog import CatalogBuilder
from app.credentials import SqlCredentialStore
from app.deps import (
    get_catalog_builder,
    get_catalog_holder,
    get_credential_store,
    get_db,
)
from app.settings import GallerySettings


def test_get_db_yields_session() -> None:
    """Test that get_db yields a SQLAlchemy session and closes it after use."""
    db_gen = get_db()
    session = next(db_gen)
    assert isinstance(session, Session)
    with contextlib.suppress(StopIteration):
        next(db_gen)


def test_get_credential_store_uses_session(session: Session) -> None:
    store = get_credential_store(session)
    assert isinstance(store, SqlCredentialStore)
    assert store.dao.db is session


def test_get_catalog_builder_uses_settings() -> None:
    settings = GallerySettings(root_prefix="other/")
    builder = get_catalog_builder(settings)
    assert isinstance(builder, CatalogBuilder)
    assert builder.settings is settings


def test_catalog_holder_is_shared() -> None:
    assert get_catalog_holder() is get_catalog_holder()
