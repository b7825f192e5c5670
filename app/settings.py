import os
from dataclasses import dataclass

# Upper bound shared by store listing pages and HTTP catalog pages
MAX_PAGE_SIZE = 1000


def _env_int(name: str, default: int, maximum: int | None = None) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        error_message = f"{name} must be an integer, got {raw!r}"
        raise ValueError(error_message) from exc
    if value <= 0:
        error_message = f"{name} must be positive, got {value}"
        raise ValueError(error_message)
    if maximum is not None and value > maximum:
        error_message = f"{name} cannot exceed {maximum}, got {value}"
        raise ValueError(error_message)
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        error_message = f"{name} must be a number, got {raw!r}"
        raise ValueError(error_message) from exc
    if value <= 0:
        error_message = f"{name} must be positive, got {value}"
        raise ValueError(error_message)
    return value


def normalize_prefix(prefix: str) -> str:
    prefix = prefix.strip().lstrip("/")
    if prefix and not prefix.endswith("/"):
        prefix += "/"
    return prefix


@dataclass(frozen=True)
class GallerySettings:
    """
    Runtime configuration for catalog builds and the HTTP layer.

    Values come from environment variables (a .env file is loaded at startup):
      - GALLERY_ROOT_PREFIX: key prefix of the gallery (default 'lifelog/')
      - GALLERY_URL_TTL_SECONDS: presigned URL validity (default 3600)
      - GALLERY_MAX_CONCURRENCY: in-flight URL resolutions (default 8)
      - GALLERY_LIST_PAGE_SIZE: MaxKeys per listing request (default 1000, max 1000)
      - GALLERY_PAGE_SIZE: default page size of GET /catalog (default 20, max 1000)
      - S3_REQUEST_TIMEOUT: connect/read timeout in seconds (default 10)
    """

    root_prefix: str = "lifelog/"
    url_ttl_seconds: int = 3600
    max_concurrent_resolutions: int = 8
    list_page_size: int = 1000
    page_size: int = 20
    request_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "GallerySettings":
        return cls(
            root_prefix=normalize_prefix(
                os.getenv("GALLERY_ROOT_PREFIX", cls.root_prefix)
            ),
            url_ttl_seconds=_env_int("GALLERY_URL_TTL_SECONDS", cls.url_ttl_seconds),
            max_concurrent_resolutions=_env_int(
                "GALLERY_MAX_CONCURRENCY", cls.max_concurrent_resolutions
            ),
            list_page_size=_env_int(
                "GALLERY_LIST_PAGE_SIZE", cls.list_page_size, MAX_PAGE_SIZE
            ),
            page_size=_env_int("GALLERY_PAGE_SIZE", cls.page_size, MAX_PAGE_SIZE),
            request_timeout=_env_float("S3_REQUEST_TIMEOUT", cls.request_timeout),
        )
