# pyright: reportUnknownVariableType=false
# pyright: reportUnknownArgumentType=false
# pyright: reportUnknownMemberType=false
import itertools
import logging
import threading
from collections.abc import Callable, Generator, Iterable
from typing import Any

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.catalog import CatalogBuilder
from app.credentials import CredentialStore, InMemoryCredentialStore
from app.database import Base
from app.deps import (
    get_catalog_builder,
    get_catalog_holder,
    get_credential_store,
    get_db,
)
from app.gallery import CatalogHolder
from app.main import app
from app.schemas import StoreCredentials
from app.settings import GallerySettings

# Configure basic logging for tests
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeS3Client:
    """
    Stands in for a boto3 S3 client.

    Listing honours Prefix, MaxKeys and ContinuationToken the way S3 does,
    unless ``honor_prefix`` is False. Presigned URLs embed a counter so two
    signings of the same key differ.
    """

    def __init__(
        self,
        keys: Iterable[str] = (),
        *,
        honor_prefix: bool = True,
        list_error: Exception | None = None,
        fail_on_call: int = 1,
        presign_failures: Iterable[str] = (),
    ) -> None:
        self.keys = list(keys)
        self.honor_prefix = honor_prefix
        self.list_error = list_error
        self.fail_on_call = fail_on_call
        self.presign_failures = set(presign_failures)
        self.list_calls: list[dict[str, Any]] = []
        self.presign_calls: list[dict[str, Any]] = []
        self.closed = 0
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def list_objects_v2(self, **kwargs: Any) -> dict[str, Any]:
        self.list_calls.append(kwargs)
        if self.list_error is not None and len(self.list_calls) == self.fail_on_call:
            raise self.list_error
        prefix = kwargs.get("Prefix", "")
        keys = [
            k for k in self.keys if not self.honor_prefix or k.startswith(prefix)
        ]
        start = int(kwargs.get("ContinuationToken", "0"))
        end = start + kwargs["MaxKeys"]
        page: dict[str, Any] = {
            "Contents": [
                {"Key": k, "Size": 1024, "ETag": f'"{i}"', "StorageClass": "STANDARD"}
                for i, k in enumerate(keys[start:end], start=start)
            ],
            "IsTruncated": end < len(keys),
            "KeyCount": len(keys[start:end]),
        }
        if end < len(keys):
            page["NextContinuationToken"] = str(end)
        return page

    def close(self) -> None:
        self.closed += 1

    def generate_presigned_url(
        self, ClientMethod: str, Params: dict[str, str], ExpiresIn: int  # noqa: N803
    ) -> str:
        with self._lock:
            self.presign_calls.append(
                {"ClientMethod": ClientMethod, "Params": Params, "ExpiresIn": ExpiresIn}
            )
            n = next(self._counter)
        key = Params["Key"]
        if key in self.presign_failures:
            raise client_error("AccessDenied", "GetObject")
        return (
            f"https://store.example/{Params['Bucket']}/{key}"
            f"?X-Amz-Expires={ExpiresIn}&sig={n}"
        )


@pytest.fixture
def credentials() -> StoreCredentials:
    return StoreCredentials(
        region="us-east-1",
        endpoint="http://localhost:9000",
        bucket="photos",
        access_key_id="AKIAEXAMPLE",
        secret_access_key="not-a-real-secret",  # noqa: S106
    )


@pytest.fixture
def settings() -> GallerySettings:
    return GallerySettings()


@pytest.fixture
def make_builder(
    settings: GallerySettings,
) -> Callable[[FakeS3Client], CatalogBuilder]:
    def factory(fake: FakeS3Client) -> CatalogBuilder:
        return CatalogBuilder(settings, client_factory=lambda _creds, _settings: fake)

    return factory


# Database Fixture (Overrides get_db dependency)
@pytest.fixture
def session() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def credential_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def fake_s3() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def client(
    session: Session,
    credential_store: InMemoryCredentialStore,
    fake_s3: FakeS3Client,
    make_builder: Callable[[FakeS3Client], CatalogBuilder],
) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        yield session

    def override_get_credential_store() -> CredentialStore:
        return credential_store

    holder = CatalogHolder()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_credential_store] = override_get_credential_store
    app.dependency_overrides[get_catalog_builder] = lambda: make_builder(fake_s3)
    app.dependency_overrides[get_catalog_holder] = lambda: holder
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_fake_s3() -> type[FakeS3Client]:
    return FakeS3Client
