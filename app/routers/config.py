from typing import Annotated

from fastapi import APIRouter, Body, Depends

from app.credentials import CredentialStore
from app.deps import get_catalog_holder, get_credential_store
from app.gallery import CatalogHolder
from app.schemas import ConfigStatusResponse, StoreCredentials

router = APIRouter()


def _status(credentials: StoreCredentials | None) -> ConfigStatusResponse:
    if credentials is None:
        return ConfigStatusResponse(configured=False)
    return ConfigStatusResponse(
        configured=True,
        region=credentials.region,
        endpoint=credentials.endpoint,
        bucket=credentials.bucket,
        access_key_id=credentials.access_key_id,
    )


@router.get("/config", response_model=ConfigStatusResponse)
def get_config(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> ConfigStatusResponse:
    """
    Report whether store credentials are saved. The secret key is never returned.
    """
    return _status(store.get())


@router.put("/config", response_model=ConfigStatusResponse)
async def put_config(
    body: Annotated[StoreCredentials, Body(...)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    holder: Annotated[CatalogHolder, Depends(get_catalog_holder)],
) -> ConfigStatusResponse:
    store.set(body)
    # The held catalog belongs to the previous store
    holder.reset()
    return _status(body)


@router.delete("/config", response_model=ConfigStatusResponse)
async def delete_config(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    holder: Annotated[CatalogHolder, Depends(get_catalog_holder)],
) -> ConfigStatusResponse:
    store.clear()
    holder.reset()
    return _status(None)
