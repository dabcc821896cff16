from functools import lru_cache
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from storefront.core.config import settings


def build_engine(url: str | None = None) -> Engine:
    url = url or settings.DATABASE_URL
    engine_kwargs = {
        "echo": False,
        "pool_pre_ping": True,
        "future": True,
    }

    if url.startswith("postgresql"):
        # postgreSQL specific config with secure connection pooling
        engine_kwargs.update({
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_CONNECTION_TIMEOUT,
            "pool_recycle": 3600,  # Recycle connections every hour
            "pool_reset_on_return": "commit",
            "connect_args": {
                "connect_timeout": settings.DB_CONNECTION_TIMEOUT,
                "application_name": "storefront_backend",
            }
        })

    return create_engine(url, **engine_kwargs)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    # built lazily so the file backend never needs a database driver
    return build_engine()


def get_session_factory(engine: Engine | None = None) -> sessionmaker:
    return sessionmaker(bind=engine or get_engine(), autoflush=False, autocommit=False, expire_on_commit=False)

