"""Permission catalog model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from contentdesk.models.base import BaseModel


class Permission(BaseModel):
    """Catalog entry describing one permission slug."""

    __tablename__ = "permissions"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    category: Mapped[str] = mapped_column(String(20), nullable=False)  # dashboard, users, ...
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)
