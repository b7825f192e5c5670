import asyncio
import logging

from app.catalog import CatalogBuilder
from app.schemas import Catalog, StoreCredentials

logger = logging.getLogger(__name__)


class CatalogSupersededError(Exception):
    """Raised when a refresh is cancelled because a newer one started."""


class CatalogHolder:
    """
    Keeps the most recent catalog in memory for paging.

    Starting a refresh cancels any refresh still in flight, and only the
    newest refresh may replace the held catalog.
    """

    def __init__(self) -> None:
        self._catalog: Catalog | None = None
        self._generation = 0
        self._task: asyncio.Task[Catalog] | None = None

    @property
    def catalog(self) -> Catalog | None:
        return self._catalog

    def reset(self) -> None:
        self._generation += 1
        self._cancel_in_flight()
        self._catalog = None

    async def refresh(
        self, builder: CatalogBuilder, credentials: StoreCredentials
    ) -> Catalog:
        self._generation += 1
        generation = self._generation
        self._cancel_in_flight()
        task = asyncio.create_task(builder.build(credentials))
        self._task = task
        try:
            catalog = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            error_message = "Catalog refresh was superseded by a newer refresh"
            raise CatalogSupersededError(error_message) from None
        if generation != self._generation:
            error_message = "Catalog refresh was superseded by a newer refresh"
            raise CatalogSupersededError(error_message)
        self._catalog = catalog
        return catalog

    def _cancel_in_flight(self) -> None:
        if self._task is not None and not self._task.done():
            logger.info("Cancelling in-flight catalog build")
            self._task.cancel()
        self._task = None
