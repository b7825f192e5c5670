from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from app.catalog.errors import ResolutionError

DEFAULT_EXPIRES_IN = 3600  # seconds


class UrlResolver:
    """
    Generates time-limited GET URLs for single objects.
    Every call signs afresh; nothing is cached.
    """

    _OPERATION = "presign_get_object"

    def __init__(self, client: Any, expires_in: int = DEFAULT_EXPIRES_IN) -> None:
        self.client = client
        self.expires_in = expires_in

    def resolve(self, bucket: str, key: str) -> str:
        try:
            return self.client.generate_presigned_url(
                ClientMethod="get_object",
                Params={"Bucket": bucket, "Key": key},
                ExpiresIn=self.expires_in,
            )
        except (BotoCoreError, ClientError) as exc:
            error_message = f"Could not sign a URL for {key!r}: {exc}"
            raise ResolutionError(error_message, self._OPERATION, key) from exc
