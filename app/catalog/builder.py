import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from botocore.exceptions import BotoCoreError

from app.catalog.client import make_s3_client
from app.catalog.errors import StoreError
from app.catalog.key_parser import parse_timestamp, split_filename
from app.catalog.object_lister import ObjectLister
from app.catalog.url_resolver import UrlResolver
from app.schemas import Catalog, CatalogEntry, StoreCredentials
from app.settings import GallerySettings

logger = logging.getLogger(__name__)

ClientFactory = Callable[[StoreCredentials, GallerySettings], Any]


class CatalogBuilder:
    """
    Builds a fresh Catalog from the objects under the gallery root.

    Keys whose filename does not follow the timestamp convention are skipped
    silently. Any listing or signing failure aborts the whole build; no
    partial catalog is ever returned. The builder holds no state between
    calls, so concurrent builds are independent.
    """

    def __init__(
        self,
        settings: GallerySettings | None = None,
        client_factory: ClientFactory = make_s3_client,
    ) -> None:
        self.settings = settings or GallerySettings()
        self.client_factory = client_factory

    async def build(self, credentials: StoreCredentials) -> Catalog:
        # Creating a boto3 client loads the service model, keep it off the loop
        try:
            client = await asyncio.to_thread(
                self.client_factory, credentials, self.settings
            )
        except (BotoCoreError, ValueError) as exc:
            error_message = f"Could not create a store client: {exc}"
            raise StoreError(error_message, "create_client") from exc
        try:
            return await self._build_with(client, credentials)
        finally:
            client.close()

    async def _build_with(self, client: Any, credentials: StoreCredentials) -> Catalog:
        lister = ObjectLister(client, page_size=self.settings.list_page_size)
        objects = await lister.list_all(credentials.bucket, self.settings.root_prefix)

        accepted: list[tuple[str, str, datetime]] = []
        for obj in objects:
            filename = split_filename(obj.key)
            timestamp = parse_timestamp(filename)
            if timestamp is None:
                logger.debug("Skipping %r: not a timestamped gallery image", obj.key)
                continue
            accepted.append((obj.key, filename, timestamp))

        resolver = UrlResolver(client, expires_in=self.settings.url_ttl_seconds)
        urls = await self._resolve_all(
            resolver, credentials.bucket, [key for key, _, _ in accepted]
        )

        entries = [
            CatalogEntry(key=key, url=url, timestamp=timestamp, filename=filename)
            for (key, filename, timestamp), url in zip(accepted, urls, strict=True)
        ]
        # list.sort is stable, including with reverse=True
        entries.sort(key=lambda entry: entry.timestamp, reverse=True)
        logger.info(
            "Built catalog with %d entries (%d objects listed)",
            len(entries),
            len(objects),
        )
        return Catalog(entries=tuple(entries), built_at=datetime.now(UTC))

    async def _resolve_all(
        self, resolver: UrlResolver, bucket: str, keys: list[str]
    ) -> list[str]:
        semaphore = asyncio.Semaphore(self.settings.max_concurrent_resolutions)

        async def resolve_one(key: str) -> str:
            async with semaphore:
                return await asyncio.to_thread(resolver.resolve, bucket, key)

        tasks = [asyncio.create_task(resolve_one(key)) for key in keys]
        try:
            return await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise
