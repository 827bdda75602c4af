"""Booking model definition."""

from datetime import date, datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base
from .mixins import RowMixin

if TYPE_CHECKING:
    from .trek import Trek


class Booking(RowMixin, Base):
    """Booking request submitted from the public booking form."""

    __tablename__ = "bookings"

    trek_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("treks.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )

    # Customer contact
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Trip details
    departure_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    travelers_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    dietary_requirements: Mapped[str | None] = mapped_column(Text, nullable=True)
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Money (whole currency units)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)
    paid_amount: Mapped[int | None] = mapped_column(Integer, nullable=True)
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Free-text statuses; the set of values is owned by the back office
    payment_status: Mapped[str | None] = mapped_column(String(30), nullable=True, default="pending")
    booking_status: Mapped[str | None] = mapped_column(String(30), nullable=True, default="pending", index=True)
    confirmation_sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("travelers_count > 0", name="ck_booking_travelers_positive"),
        CheckConstraint("total_price >= 0", name="ck_booking_total_price_non_negative"),
    )

    trek: Mapped["Trek"] = relationship("Trek", back_populates="bookings")

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, trek_id={self.trek_id}, "
            f"travelers={self.travelers_count}, status={self.booking_status})>"
        )
