"""Transaction models for the MoMo SDK."""
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import MomoModel


class PartyIdType(str, Enum):
    """Kind of identifier used for a payer or payee."""

    MSISDN = "MSISDN"
    EMAIL = "EMAIL"
    PARTY_CODE = "PARTY_CODE"


class TransactionStatus(str, Enum):
    """Transaction status as reported by MoMo."""

    PENDING = "PENDING"
    SUCCESSFUL = "SUCCESSFUL"
    FAILED = "FAILED"
    REJECTED = "REJECTED"
    TIMEOUT = "TIMEOUT"


FINAL_STATUSES = frozenset(
    status.value for status in TransactionStatus if status != TransactionStatus.PENDING
)


class Party(MomoModel):
    """A payer or payee."""

    party_id_type: PartyIdType = Field(default=PartyIdType.MSISDN, alias="partyIdType")
    party_id: str = Field(alias="partyId")


class RequestToPayPayload(MomoModel):
    """Body of a collection request-to-pay."""

    amount: str
    currency: str
    external_id: str = Field(alias="externalId")
    payer: Party
    payer_message: str = Field(alias="payerMessage")
    payee_note: str = Field(alias="payeeNote")


class TransferPayload(MomoModel):
    """Body of a disbursement transfer."""

    amount: str
    currency: str
    external_id: str = Field(alias="externalId")
    payee: Party
    payer_message: str = Field(alias="payerMessage")
    payee_note: str = Field(alias="payeeNote")


class TransactionStatusResponse(MomoModel):
    """Status record of a request-to-pay or transfer."""

    amount: Optional[Decimal] = None
    currency: Optional[str] = None
    external_id: Optional[str] = Field(default=None, alias="externalId")
    payer: Optional[Party] = None
    payee: Optional[Party] = None
    payer_message: Optional[str] = Field(default=None, alias="payerMessage")
    payee_note: Optional[str] = Field(default=None, alias="payeeNote")
    status: TransactionStatus
    reason: Optional[str] = None
    financial_transaction_id: Optional[str] = Field(
        default=None, alias="financialTransactionId"
    )

    @property
    def is_final(self) -> bool:
        """True once MoMo will no longer change the status."""
        return self.status in FINAL_STATUSES


class AccountBalance(MomoModel):
    """Available balance of the product account."""

    available_balance: Decimal = Field(alias="availableBalance")
    currency: str


class AccountHolderInfo(MomoModel):
    """Basic information about a MoMo account holder."""

    given_name: Optional[str] = None
    family_name: Optional[str] = None
    birthdate: Optional[str] = None
    locale: Optional[str] = None
    gender: Optional[str] = None
    status: Optional[str] = None


class TransactionOptions(MomoModel):
    """Optional parameters for request-to-pay and transfer.

    Reference and external ids default to fresh UUIDs, currency to the
    configured default, and the messages to product-specific text.
    """

    idempotency_key: Optional[str] = None
    external_id: Optional[str] = None
    reference_id: Optional[str] = None
    currency: Optional[str] = None
    payer_message: Optional[str] = None
    payee_note: Optional[str] = None


RequestToPayOptions = TransactionOptions
TransferOptions = TransactionOptions
