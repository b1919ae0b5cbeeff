from typing import Optional
from sqlalchemy.sql import select

from app.db.store import DataStore
from app.models.user import User, UserRole


class CRUDUser:
    async def get_user(self, store: DataStore, user_id: str) -> Optional[User]:
        return await store.first(select(User).where(User.id == user_id))

    async def create_user(self, store: DataStore, user_id: str, email: str, full_name: str,
                          role: UserRole = UserRole.USER) -> User:
        return await store.insert(User(id=user_id, email=email, full_name=full_name, role=role))


crud_user = CRUDUser()
