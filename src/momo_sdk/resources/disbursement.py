"""
Disbursement resource for the MoMo SDK.

Sends money to subscribers.
"""
from __future__ import annotations

from typing import Optional

from ..auth import Product
from ..models.transaction import TransactionStatusResponse, TransferOptions, TransferPayload
from .base import Amount, ProductResource


class DisbursementResource(ProductResource):
    """Resource for disbursement operations.

    Uses the disbursement subscription key, which falls back to the
    subscription key when not configured.
    """

    product = Product.DISBURSEMENT
    transaction_path = "transfer"
    counterparty = "payee"
    payload_type = TransferPayload
    default_payer_message = "Disbursement payment"
    default_payee_note = "Funds received"

    def transfer(
        self,
        phone: str,
        amount: Amount,
        options: Optional[TransferOptions] = None,
    ) -> str:
        """Transfer money to a mobile money account.

        Args:
            phone: Payee mobile number; normalised before sending
            amount: Amount to send
            options: Reference/external ids, currency, messages, idempotency key

        Returns:
            The reference id of the transfer
        """
        return self._initiate(phone, amount, options)

    def get_transfer_status(self, reference_id: str) -> TransactionStatusResponse:
        """Get the status of a transfer."""
        return self._get_status(reference_id)


__all__ = ["DisbursementResource"]
