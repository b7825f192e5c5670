from typing import Any

import boto3
from botocore.config import Config

from app.schemas import StoreCredentials
from app.settings import GallerySettings


def make_s3_client(credentials: StoreCredentials, settings: GallerySettings) -> Any:
    """
    Create an S3 client scoped to one set of credentials.

    Each call uses its own boto3 session so concurrent builds never share a
    client. Path-style addressing and SigV4 keep MinIO and other
    S3-compatible endpoints working; an empty endpoint means AWS itself.
    Transport retries are disabled, retrying is left to the caller.
    """
    cfg = Config(
        region_name=credentials.region,
        signature_version="s3v4",
        s3={"addressing_style": "path"},
        connect_timeout=settings.request_timeout,
        read_timeout=settings.request_timeout,
        retries={"mode": "standard", "total_max_attempts": 1},
        max_pool_connections=settings.max_concurrent_resolutions,
    )
    session = boto3.session.Session()
    return session.client(
        "s3",
        endpoint_url=credentials.endpoint or None,
        aws_access_key_id=credentials.access_key_id,
        aws_secret_access_key=credentials.secret_access_key.get_secret_value(),
        config=cfg,
    )
