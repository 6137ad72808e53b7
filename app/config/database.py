# app/config/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .settings import settings

engine_kwargs = {
    "pool_pre_ping": True,
    "pool_recycle": 300,
    "echo": settings.debug
}

# SSL for hosted databases reached through DATABASE_URL
if settings.requires_ssl:
    engine_kwargs["connect_args"] = {
        "sslmode": "require"
    }

# Create engine
engine = create_engine(
    settings.sqlalchemy_url,
    **engine_kwargs
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Database dependency
def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
