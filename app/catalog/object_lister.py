import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from botocore.parsers import ResponseParserError

from app.catalog.errors import StoreError
from app.catalog.key_parser import split_filename

logger = logging.getLogger(__name__)

IMAGE_SUFFIX = ".jpg"
MAX_PAGE_SIZE = 1000


@dataclass(frozen=True)
class ListedObject:
    key: str
    metadata: Mapping[str, Any] = field(default_factory=dict)


class ObjectLister:
    """
    Lists every image object under a prefix, following continuation tokens
    until the store reports the listing is complete.
    """

    _OPERATION = "list_objects"

    def __init__(self, client: Any, page_size: int = MAX_PAGE_SIZE) -> None:
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            error_message = f"page_size must be between 1 and {MAX_PAGE_SIZE}"
            raise ValueError(error_message)
        self.client = client
        self.page_size = page_size

    async def list_all(self, bucket: str, prefix: str) -> list[ListedObject]:
        objects: list[ListedObject] = []
        seen: set[str] = set()
        tokens: set[str] = set()
        token: str | None = None
        pages = 0
        while True:
            page = await asyncio.to_thread(self._fetch_page, bucket, prefix, token)
            pages += 1
            if not isinstance(page, Mapping):
                error_message = "Store returned a listing page that is not a mapping"
                raise StoreError(error_message, self._OPERATION)
            contents = page.get("Contents") or []
            if not isinstance(contents, list):
                error_message = "Store returned listing contents that are not a list"
                raise StoreError(error_message, self._OPERATION)
            for record in contents:
                if not isinstance(record, Mapping):
                    error_message = "Store returned a malformed listing entry"
                    raise StoreError(error_message, self._OPERATION)
                key = record.get("Key")
                if not isinstance(key, str):
                    error_message = "Store returned a listing entry without a key"
                    raise StoreError(error_message, self._OPERATION)
                if key in seen or not self._is_gallery_image(key, prefix):
                    continue
                seen.add(key)
                metadata = {k: v for k, v in record.items() if k != "Key"}
                objects.append(ListedObject(key=key, metadata=metadata))
            if not page.get("IsTruncated"):
                break
            token = page.get("NextContinuationToken")
            if not token or token in tokens:
                error_message = (
                    "Store reported a truncated listing without a usable "
                    "continuation token"
                )
                raise StoreError(error_message, self._OPERATION)
            tokens.add(token)
        logger.info(
            "Listed %d image objects under %r in %d page(s)",
            len(objects),
            prefix,
            pages,
        )
        return objects

    def _fetch_page(
        self, bucket: str, prefix: str, token: str | None
    ) -> Mapping[str, Any]:
        kwargs: dict[str, Any] = {
            "Bucket": bucket,
            "Prefix": prefix,
            "MaxKeys": self.page_size,
        }
        if token:
            kwargs["ContinuationToken"] = token
        try:
            return self.client.list_objects_v2(**kwargs)
        except (BotoCoreError, ClientError) as exc:
            error_message = f"Listing objects under {prefix!r} failed: {exc}"
            raise StoreError(error_message, self._OPERATION) from exc
        except (ResponseParserError, ValueError) as exc:
            # botocore parse failures are not BotoCoreError subclasses
            error_message = f"Store sent an unreadable listing under {prefix!r}: {exc}"
            raise StoreError(error_message, self._OPERATION) from exc

    @staticmethod
    def _is_gallery_image(key: str, prefix: str) -> bool:
        return key.startswith(prefix) and split_filename(key).endswith(IMAGE_SUFFIX)
