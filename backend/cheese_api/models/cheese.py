"""
Cheese Catalog Backend — Cheese SQLAlchemy Model
==================================================

What:  ORM model for the `cheeses` table plus the CheeseColor enumeration.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.
Who:   Used by CheeseRepository for persistence and by the schemas for colors.

Table Design:
    - id:          Integer primary key, assigned by the database on insert
    - name:        Display name, required non-empty on create
    - price:       Unit price, strictly positive (checked at the API boundary)
    - color:       Enum member NAME (WHITE, CREAM, ...) stored as a short string
    - image_name:  Original filename of the uploaded image, verbatim
    - image_type:  MIME type reported by the client at upload time
    - image_blob:  Raw image bytes, one image per cheese

    There is deliberately no image_data column: the data URI sent to clients
    is rebuilt from image_type + image_blob on every read.
"""

import enum
from typing import Any, Optional

from sqlalchemy import Enum, Float, Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from cheese_api.database import Base


class CheeseColor(str, enum.Enum):
    """
    Closed set of cheese colors.

    Member values equal member names so the JSON representation is the
    upper-case name (e.g. "YELLOW"). `label` gives the lowercase display form.
    """

    WHITE = "WHITE"
    CREAM = "CREAM"
    YELLOW = "YELLOW"
    ORANGE = "ORANGE"
    BROWN = "BROWN"

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: Any) -> Optional["CheeseColor"]:
        """
        Case-insensitive lookup by member name.

        Returns the matching member, or None when `value` is not a string
        naming one of the five colors.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        for color in cls:
            if color.name.lower() == value.lower():
                return color
        return None


class Cheese(Base):
    """
    A cheese record as stored in the database.

    Lifecycle:
        1. Created by POST /cheeses with name, price, color and an image
        2. Updated by PUT /cheeses/{id}; image columns change only when a new
           image is uploaded
        3. Deleted by DELETE /cheeses/{id} (hard delete)
    """

    __tablename__ = "cheeses"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    price: Mapped[float] = mapped_column(Float, nullable=False)

    # native_enum=False: stored as VARCHAR so adding a color needs no ALTER TYPE
    color: Mapped[CheeseColor] = mapped_column(
        Enum(CheeseColor, native_enum=False, length=16, name="cheese_color"),
        nullable=False,
    )

    # ── Image ─────────────────────────────────────────────────────────────
    image_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    image_type: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    image_blob: Mapped[Optional[bytes]] = mapped_column(LargeBinary, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<Cheese(id={self.id}, name='{self.name}', price={self.price}, "
            f"color='{self.color.label if self.color else None}')>"
        )
