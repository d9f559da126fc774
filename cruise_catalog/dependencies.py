from typing import Iterator
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from cruise_catalog.core.sync_status import StaticSyncStatusProvider, SyncStatusProvider

# In tests, Behave overrides get_db(). This default is only for dev/prod.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cruise_catalog.db")

_engine = create_engine(DATABASE_URL, future=True)
_SessionLocal = sessionmaker(bind=_engine, autoflush=False, autocommit=False, future=True)

_default_sync_status = StaticSyncStatusProvider(in_progress=False)

def get_db() -> Iterator[Session]:
    db = _SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_sync_status_provider() -> SyncStatusProvider:
    # The import orchestrator lives in another process; hosts override this dependency.
    return _default_sync_status
