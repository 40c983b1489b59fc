from datetime import datetime
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database.database import Base


class CollectionDocument(Base):
    __tablename__ = "collections"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)

    # JSON array of flat records, same shape as the file backend
    payload: Mapped[str] = mapped_column(Text, default="[]")

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow
    )
