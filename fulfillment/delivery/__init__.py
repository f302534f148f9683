"""
E-mail delivery clients.
"""

from fulfillment.delivery.base import BatchSendResult, DeliveryRequestError, EmailDeliveryService
from fulfillment.delivery.resend_client import ResendBatchClient

__all__ = [
    "BatchSendResult",
    "DeliveryRequestError",
    "EmailDeliveryService",
    "ResendBatchClient",
]
