from enum import Enum
from sqlalchemy import String, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base
from app.models import TimestampMixin


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class User(Base, TimestampMixin):
    # same id as the identity provider's subject
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(SAEnum(
        UserRole, name="user_role_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=UserRole.USER)
