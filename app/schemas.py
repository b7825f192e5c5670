from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class StoreCredentials(BaseModel):
    """Connection details for the S3-compatible store holding the gallery."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    region: str = Field(min_length=1)
    endpoint: str = ""
    bucket: str = Field(min_length=1)
    access_key_id: str = Field(min_length=1)
    secret_access_key: SecretStr


class CatalogEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    url: str
    timestamp: datetime
    filename: str


class Catalog(BaseModel):
    """
    Newest-first list of gallery images produced by one catalog build.
    """

    model_config = ConfigDict(frozen=True)

    entries: tuple[CatalogEntry, ...] = ()
    built_at: datetime

    def __len__(self) -> int:
        return len(self.entries)

    def page(self, offset: int, limit: int) -> tuple[CatalogEntry, ...]:
        return self.entries[offset : offset + limit]


class ConfigStatusResponse(BaseModel):
    configured: bool
    region: str | None = None
    endpoint: str | None = None
    bucket: str | None = None
    access_key_id: str | None = None


class RefreshResponse(BaseModel):
    status: str
    total: int
    built_at: datetime


class CatalogPageResponse(BaseModel):
    total: int
    offset: int
    limit: int
    next_offset: int | None
    entries: list[CatalogEntry]
