import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from starlette.status import HTTP_409_CONFLICT, HTTP_502_BAD_GATEWAY

from app.catalog import CatalogBuilder, CatalogError
from app.credentials import CredentialStore
from app.deps import (
    get_catalog_builder,
    get_catalog_holder,
    get_credential_store,
    get_settings,
)
from app.gallery import CatalogHolder, CatalogSupersededError
from app.schemas import Catalog, CatalogPageResponse, RefreshResponse
from app.settings import MAX_PAGE_SIZE, GallerySettings

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_CONFIGURED = "Store is not configured"
LOAD_FAILED = (
    "Failed to load images. Please check your S3 configuration and try again."
)


async def _refresh(
    store: CredentialStore,
    builder: CatalogBuilder,
    holder: CatalogHolder,
) -> Catalog | JSONResponse:
    credentials = store.get()
    if credentials is None:
        return JSONResponse(
            status_code=HTTP_409_CONFLICT, content={"detail": NOT_CONFIGURED}
        )
    try:
        return await holder.refresh(builder, credentials)
    except CatalogSupersededError as exc:
        return JSONResponse(status_code=HTTP_409_CONFLICT, content={"detail": str(exc)})
    except CatalogError as exc:
        logger.warning("Catalog build failed during %s: %s", exc.operation, exc)
        return JSONResponse(
            status_code=HTTP_502_BAD_GATEWAY,
            content={"detail": LOAD_FAILED, "operation": exc.operation},
        )


@router.post("/catalog/refresh", response_model=RefreshResponse)
async def refresh_catalog(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    builder: Annotated[CatalogBuilder, Depends(get_catalog_builder)],
    holder: Annotated[CatalogHolder, Depends(get_catalog_holder)],
) -> RefreshResponse | JSONResponse:
    """
    Rebuild the catalog from the saved store credentials.
    """
    result = await _refresh(store, builder, holder)
    if isinstance(result, JSONResponse):
        return result
    return RefreshResponse(status="ok", total=len(result), built_at=result.built_at)


@router.get("/catalog", response_model=CatalogPageResponse)
async def get_catalog(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    builder: Annotated[CatalogBuilder, Depends(get_catalog_builder)],
    holder: Annotated[CatalogHolder, Depends(get_catalog_holder)],
    settings: Annotated[GallerySettings, Depends(get_settings)],
    offset: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int | None, Query(ge=1, le=MAX_PAGE_SIZE)] = None,
) -> CatalogPageResponse | JSONResponse:
    """
    Return one page of the newest-first catalog, building it on first use.
    """
    catalog = holder.catalog
    if catalog is None:
        result = await _refresh(store, builder, holder)
        if isinstance(result, JSONResponse):
            return result
        catalog = result
    limit = limit or settings.page_size
    entries = catalog.page(offset, limit)
    next_offset = offset + limit if offset + limit < len(catalog) else None
    return CatalogPageResponse(
        total=len(catalog),
        offset=offset,
        limit=limit,
        next_offset=next_offset,
        entries=list(entries),
    )
