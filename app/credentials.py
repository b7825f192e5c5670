import logging
from abc import ABC, abstractmethod

from pydantic import ValidationError

from app.dao import StoreConfigDAO
from app.schemas import StoreCredentials

logger = logging.getLogger(__name__)


class CredentialStore(ABC):
    """
    Interface for wherever the user's store credentials are kept between
    requests. Catalog builds only ever receive credentials from here.
    """

    @abstractmethod
    def get(self) -> StoreCredentials | None:
        """
        Return the saved credentials, or None when nothing usable is saved.
        """
        error_message = "get not implemented"
        raise NotImplementedError(error_message)

    @abstractmethod
    def set(self, credentials: StoreCredentials) -> None:
        """
        Save credentials, replacing any previously saved ones.
        """
        error_message = "set not implemented"
        raise NotImplementedError(error_message)

    @abstractmethod
    def clear(self) -> None:
        """
        Forget any saved credentials.
        """
        error_message = "clear not implemented"
        raise NotImplementedError(error_message)


class InMemoryCredentialStore(CredentialStore):
    def __init__(self, credentials: StoreCredentials | None = None) -> None:
        self._credentials = credentials

    def get(self) -> StoreCredentials | None:
        return self._credentials

    def set(self, credentials: StoreCredentials) -> None:
        self._credentials = credentials

    def clear(self) -> None:
        self._credentials = None


class SqlCredentialStore(CredentialStore):
    """
    Credentials persisted in the application database.
    A saved record that no longer validates is discarded.
    """

    def __init__(self, dao: StoreConfigDAO) -> None:
        self.dao = dao

    def get(self) -> StoreCredentials | None:
        row = self.dao.get()
        if row is None:
            return None
        try:
            return StoreCredentials(
                region=row.region,
                endpoint=row.endpoint,
                bucket=row.bucket,
                access_key_id=row.access_key_id,
                secret_access_key=row.secret_access_key,
            )
        except ValidationError:
            logger.warning("Discarding saved store configuration that failed validation")
            self.dao.delete()
            return None

    def set(self, credentials: StoreCredentials) -> None:
        self.dao.save(
            region=credentials.region,
            endpoint=credentials.endpoint,
            bucket=credentials.bucket,
            access_key_id=credentials.access_key_id,
            secret_access_key=credentials.secret_access_key.get_secret_value(),
        )

    def clear(self) -> None:
        self.dao.delete()
