from typing import Optional
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base
from app.models import TimestampMixin, new_id


class Movie(Base, TimestampMixin):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    duration: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    rating: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
