"""
Collection resource for the MoMo SDK.

Requests payments from subscribers.
"""
from __future__ import annotations

from typing import Optional

from ..auth import Product
from ..models.transaction import (
    RequestToPayOptions,
    RequestToPayPayload,
    TransactionStatusResponse,
)
from .base import Amount, ProductResource


class CollectionResource(ProductResource):
    """Resource for collection operations.

    Example:
        ```python
        with MomoClient(config) as client:
            reference_id = client.collection.request_to_pay("0770123456", "10.00")
            status = client.collection.get_transaction_status(reference_id)
        ```
    """

    product = Product.COLLECTION
    transaction_path = "requesttopay"
    counterparty = "payer"
    payload_type = RequestToPayPayload
    default_payer_message = "Payment request"
    default_payee_note = "Thank you for your payment"

    def request_to_pay(
        self,
        phone: str,
        amount: Amount,
        options: Optional[RequestToPayOptions] = None,
    ) -> str:
        """Ask a subscriber to approve a payment.

        The call returns once MoMo has accepted the request; poll
        :meth:`get_transaction_status` with the returned id for the outcome.

        Args:
            phone: Payer mobile number; normalised before sending
            amount: Amount to collect
            options: Reference/external ids, currency, messages, idempotency key

        Returns:
            The reference id of the request
        """
        return self._initiate(phone, amount, options)

    def get_transaction_status(self, reference_id: str) -> TransactionStatusResponse:
        """Get the status of a request-to-pay."""
        return self._get_status(reference_id)


__all__ = ["CollectionResource"]
