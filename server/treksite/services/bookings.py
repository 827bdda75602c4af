"""Booking service."""

import logging
from typing import Any, Mapping
from uuid import UUID

from .base import EntityService, Result

logger = logging.getLogger(__name__)

# Statuses the back office is known to use. Others are stored as given.
KNOWN_BOOKING_STATUSES = frozenset({"pending", "confirmed", "cancelled", "completed"})
KNOWN_PAYMENT_STATUSES = frozenset({"pending", "paid", "partial", "refunded", "failed"})


class BookingService(EntityService):
    """All bookings, newest first."""

    table = "bookings"

    async def update(self, row_id: UUID, values: Mapping[str, Any]) -> Result[Any]:
        booking_status = values.get("booking_status")
        payment_status = values.get("payment_status")
        if booking_status is not None and booking_status not in KNOWN_BOOKING_STATUSES:
            logger.info(
                "Unrecognized booking status stored",
                extra={"booking_id": str(row_id), "booking_status": booking_status}
            )
        if payment_status is not None and payment_status not in KNOWN_PAYMENT_STATUSES:
            logger.info(
                "Unrecognized payment status stored",
                extra={"booking_id": str(row_id), "payment_status": payment_status}
            )
        return await super().update(row_id, values)

    async def update_status(self, row_id: UUID, booking_status: str) -> Result[Any]:
        return await self.update(row_id, {"booking_status": booking_status})
