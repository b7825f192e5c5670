import os

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

load_dotenv()

# Database URL from environment or default to local SQLite file
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./gallery.db")

# Engine creation; SQLite needs check_same_thread
engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})

# Session factory for DB sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for ORM models
Base = declarative_base()
