import datetime
from typing import Optional
from sqlalchemy import Date, ForeignKey, Numeric, String, Time
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base
from app.models import TimestampMixin, new_id


class Showtime(Base, TimestampMixin):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    movie_id: Mapped[str] = mapped_column(String(36), ForeignKey(
        "movies.id", ondelete="CASCADE"), index=True, nullable=False)
    theater_id: Mapped[str] = mapped_column(String(36), ForeignKey(
        "theaters.id", ondelete="CASCADE"), index=True, nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    time: Mapped[datetime.time] = mapped_column(Time, nullable=False)
    price: Mapped[Optional[float]] = mapped_column(Numeric(12, 2), nullable=True)
