"""
Pydantic wire and report schemas.
"""

from fulfillment.schemas.email import OutboundEmail
from fulfillment.schemas.summary import FulfillmentSummaryResponse

__all__ = ["FulfillmentSummaryResponse", "OutboundEmail"]
