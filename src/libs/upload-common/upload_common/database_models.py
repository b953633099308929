# src/libs/upload-common/upload_common/database_models.py
import uuid

from sqlalchemy import Column, Integer, String, DateTime, func

from .db_base import Base


def _new_upload_id() -> str:
    return str(uuid.uuid4())


class Upload(Base):
    __tablename__ = 'uploads'

    id = Column(String, primary_key=True, default=_new_upload_id)
    name = Column(String, index=True, nullable=False)
    remote_key = Column(String, unique=True, nullable=False)
    remote_url = Column(String, nullable=False)
    content_type = Column(String, nullable=True)
    size_in_bytes = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), index=True, nullable=False, default=func.now())

    def __repr__(self) -> str:
        return f"<Upload id={self.id!r} name={self.name!r}>"
