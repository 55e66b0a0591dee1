"""
SQLAlchemy model for minion stat records.
"""

from sqlalchemy import Boolean, Integer, String, true
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base


class Minion(Base):
    """
    One minion's combat stat block.

    Rows are never deleted: ``active`` is flipped to False instead, and
    listings only show active rows.
    """

    __tablename__ = "minions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)

    # Stats
    hp: Mapped[int] = mapped_column(Integer, nullable=False)
    max_hp: Mapped[int] = mapped_column(Integer, nullable=False)
    ac: Mapped[int] = mapped_column(Integer, nullable=False)
    attack: Mapped[int] = mapped_column(Integer, nullable=False)
    damage: Mapped[str] = mapped_column(String, nullable=False, default="", server_default="")  # Dice notation, e.g. "1d6+2"
    notes: Mapped[str] = mapped_column(String, nullable=False, default="", server_default="")

    # Soft-delete flag
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    def __repr__(self) -> str:
        return f"<Minion(id={self.id}, name='{self.name}', hp={self.hp}/{self.max_hp})>"
