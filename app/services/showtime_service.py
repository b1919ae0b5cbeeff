import logging

from app.core.config import get_settings
from app.core.exceptions import DataStoreError, LoadError, ShowtimeNotFoundError
from app.crud.showtime import crud_showtime
from app.db.store import DataStore
from app.schemas.showtime import ShowtimeDetails

logger = logging.getLogger(__name__)


async def get_showtime_details(store: DataStore, showtime_id: str) -> ShowtimeDetails:
    logger.info(f"Fetching details for showtime ID: {showtime_id}")
    try:
        showtime = await crud_showtime.get_showtime_with_names(store, showtime_id)
    except DataStoreError as e:
        logger.error(f"Showtime fetch error: {e}", exc_info=True)
        raise LoadError("Failed to load showtime details. Please try again.") from e
    if showtime is None:
        raise ShowtimeNotFoundError(showtime_id)

    # unpriced showtimes sell at the house price
    price = float(showtime["price"] or 0) or get_settings().DEFAULT_TICKET_PRICE
    return ShowtimeDetails(
        id=showtime["id"],
        movie_id=showtime["movie_id"],
        movie_title=showtime["movie_title"],
        theater_id=showtime["theater_id"],
        theater_name=showtime["theater_name"],
        date=showtime["date"],
        time=showtime["time"],
        price=price
    )
