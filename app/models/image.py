"""
Image model for listing photos referenced by URL.
"""

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.home import Home


class Image(Base):
    """Image attached to a home listing."""

    __tablename__ = "images"

    url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        comment="Public URL of the image"
    )

    home_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("homes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the home this image belongs to"
    )

    home: Mapped["Home"] = relationship(
        "Home",
        back_populates="images"
    )

    def __repr__(self) -> str:
        return f"<Image(id={self.id}, home_id={self.home_id}, url={self.url})>"
