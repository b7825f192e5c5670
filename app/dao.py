from sqlalchemy.orm import Session

from app.models import StoreConfig

# The gallery is configured for a single store at a time
CONFIG_ID = 1


class StoreConfigDAO:
    """Data Access Object for the saved store configuration."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self) -> StoreConfig | None:
        return self.db.get(StoreConfig, CONFIG_ID)

    def save(
        self,
        *,
        region: str,
        endpoint: str,
        bucket: str,
        access_key_id: str,
        secret_access_key: str,
    ) -> StoreConfig:
        config = self.get()
        if config is None:
            config = StoreConfig(id=CONFIG_ID)
            self.db.add(config)
        config.region = region
        config.endpoint = endpoint
        config.bucket = bucket
        config.access_key_id = access_key_id
        config.secret_access_key = secret_access_key
        self.db.commit()
        self.db.refresh(config)
        return config

    def delete(self) -> bool:
        config = self.get()
        if config is None:
            return False
        self.db.delete(config)
        self.db.commit()
        return True
