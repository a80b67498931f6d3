"""Shared base for SQLModel entities"""

import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel


class BaseModel(SQLModel):
    """Base class for all persisted domain entities"""

    pass


def generate_uuid() -> str:
    """Record key for new entities (32 hex chars, no dashes)"""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    """Timezone-aware UTC timestamp for created_at/updated_at columns"""
    return datetime.now(timezone.utc)
