from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class StoreConfig(Base):
    __tablename__ = "store_config"

    id: Mapped[int] = mapped_column(primary_key=True)
    region: Mapped[str] = mapped_column(String, nullable=False, default="")
    endpoint: Mapped[str] = mapped_column(String, nullable=False, default="")
    bucket: Mapped[str] = mapped_column(String, nullable=False, default="")
    access_key_id: Mapped[str] = mapped_column(String, nullable=False, default="")
    secret_access_key: Mapped[str] = mapped_column(
        String, nullable=False, default=""
    )
