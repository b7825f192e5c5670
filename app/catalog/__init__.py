from .builder import CatalogBuilder
from .client import make_s3_client
from .errors import CatalogError, ResolutionError, StoreError
from .key_parser import format_filename, parse_timestamp, split_filename
from .object_lister import ListedObject, ObjectLister
from .url_resolver import UrlResolver

__all__ = [
    "CatalogBuilder",
    "CatalogError",
    "ListedObject",
    "ObjectLister",
    "ResolutionError",
    "StoreError",
    "UrlResolver",
    "format_filename",
    "make_s3_client",
    "parse_timestamp",
    "split_filename",
]
