# launchpad_indexer/database/base.py

from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import declarative_base
import msgspec


Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class DBBaseModel(Base, TimestampMixin):
    __abstract__ = True

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    @classmethod
    def from_msgspec(cls, msgspec_obj: msgspec.Struct, **overrides):
        data = msgspec.structs.asdict(msgspec_obj)
        data.update(overrides)
        valid_columns = {col.name for col in cls.__table__.columns}
        filtered_data = {k: v for k, v in data.items() if k in valid_columns}

        return cls(**filtered_data)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
