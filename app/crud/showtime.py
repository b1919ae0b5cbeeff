from typing import Optional
from sqlalchemy.sql import select

from app.db.store import DataStore
from app.models.movie import Movie
from app.models.showtime import Showtime
from app.models.theater import Theater


class CRUDShowtime:
    async def get_showtime_with_names(self, store: DataStore, showtime_id: str) -> Optional[dict]:
        stmt = (select(
            Showtime.id,
            Showtime.movie_id,
            Showtime.theater_id,
            Showtime.date,
            Showtime.time,
            Showtime.price,
            Movie.title.label("movie_title"),
            Theater.name.label("theater_name")
        )
            .join(Movie, Showtime.movie_id == Movie.id)
            .join(Theater, Showtime.theater_id == Theater.id)
            .where(Showtime.id == showtime_id))
        rows = await store.rows(stmt)
        return dict(rows[0]) if rows else None


crud_showtime = CRUDShowtime()
