"""V1 pricing quote endpoint for booking selections."""

import logging

from fastapi import APIRouter, Depends

from ...api.dependencies.services import get_pricing_service
from ...core.config import settings
from ...core.exceptions import DomainException
from ...schemas.booking import BookingQuoteIn, BookingQuoteOut
from ...services.pricing_service import PricingService

logger = logging.getLogger(__name__)

# V1 router - mounted at /api/v1/pricing
router = APIRouter(tags=["pricing"])


@router.post("/quote", response_model=BookingQuoteOut)
def quote_booking_selection(
    payload: BookingQuoteIn,
    pricing_service: PricingService = Depends(get_pricing_service),
) -> BookingQuoteOut:
    """Price a selection without persisting anything."""
    try:
        quote = pricing_service.compute_quote(payload)
    except DomainException as exc:
        raise exc.to_http_exception() from exc

    return BookingQuoteOut.from_quote(quote, settings.currency)
