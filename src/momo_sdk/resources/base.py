"""
Base resource for MoMo products.

Collection and Disbursement share one shape: initiate a transaction, poll its
status, read the account balance and look up an account holder. They differ
in path prefix, counterparty direction and subscription key, which subclasses
declare as class attributes.
"""
from __future__ import annotations

import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Dict, Optional, Type, TypeVar, Union
from urllib.parse import quote

from ..auth import REFERENCE_ID_HEADER, SUBSCRIPTION_KEY_HEADER, Product
from ..http import Request
from ..models.base import MomoModel
from ..models.errors import InvalidResponseError, ValidationError
from ..models.transaction import (
    AccountBalance,
    AccountHolderInfo,
    Party,
    PartyIdType,
    TransactionOptions,
    TransactionStatusResponse,
)
from ..phone import PhoneNormalizer, format_phone_number

if TYPE_CHECKING:
    from ..auth import AuthService
    from ..config import MomoConfig
    from ..http import HTTPDispatcher

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=MomoModel)

Amount = Union[Decimal, int, float, str]
CENT = Decimal("0.01")

TARGET_ENVIRONMENT_HEADER = "X-Target-Environment"
IDEMPOTENCY_KEY_HEADER = "X-Idempotency-Key"


def format_amount(amount: Amount) -> str:
    """Render an amount as a string with two decimal places.

    Raises:
        ValidationError: If the amount is not a positive finite number with
            at most two decimal places
    """
    if isinstance(amount, bool):
        raise ValidationError(f"invalid amount: {amount!r}", field="amount")
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"invalid amount: {amount!r}", field="amount") from exc
    if not value.is_finite():
        raise ValidationError(f"invalid amount: {amount!r}", field="amount")
    try:
        quantized = value.quantize(CENT)
    except InvalidOperation as exc:
        raise ValidationError(f"invalid amount: {amount!r}", field="amount") from exc
    if quantized != value:
        raise ValidationError(
            f"amount has more than two decimal places: {amount!r}", field="amount"
        )
    if quantized <= 0:
        raise ValidationError(f"amount must be positive, got {amount!r}", field="amount")
    return str(quantized)


class ProductResource:
    """Shared operations of a MoMo product.

    Attributes:
        product: Product whose token and subscription key are used
        transaction_path: Path segment of the initiating call
        counterparty: Payload field naming the other party
        payload_type: Model of the initiating call body
        default_payer_message: Used when options carry no payer message
        default_payee_note: Used when options carry no payee note
    """

    product: Product
    transaction_path: str
    counterparty: str
    payload_type: Type[MomoModel]
    default_payer_message: str
    default_payee_note: str

    def __init__(
        self,
        config: "MomoConfig",
        dispatcher: "HTTPDispatcher",
        auth: "AuthService",
        phone_normalizer: PhoneNormalizer = format_phone_number,
    ) -> None:
        self._config = config
        self._dispatcher = dispatcher
        self._auth = auth
        self._normalize_phone = phone_normalizer

    @property
    def base_path(self) -> str:
        return f"/{self.product.value}/v1_0"

    def _headers(
        self,
        reference_id: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> Dict[str, str]:
        token = self._auth.get_access_token(self.product)
        headers = {
            "Authorization": f"Bearer {token}",
            TARGET_ENVIRONMENT_HEADER: self._config.target_environment,
            SUBSCRIPTION_KEY_HEADER: self._auth.subscription_key(self.product),
        }
        if reference_id:
            headers[REFERENCE_ID_HEADER] = reference_id
        if idempotency_key:
            headers[IDEMPOTENCY_KEY_HEADER] = idempotency_key
        return headers

    def _get(self, path: str, result_type: Type[T]) -> T:
        result = self._dispatcher.send(
            Request(method="GET", path=path, headers=self._headers()),
            result_type,
        )
        if result is None:
            raise InvalidResponseError(f"empty response from GET {path}")
        return result

    def _post(self, path: str, body: Any, headers: Dict[str, str]) -> None:
        self._dispatcher.send(Request(method="POST", path=path, body=body, headers=headers))

    def _initiate(
        self,
        phone: str,
        amount: Amount,
        options: Optional[TransactionOptions] = None,
    ) -> str:
        phone = self._normalize_phone(phone)
        formatted_amount = format_amount(amount)
        options = options or TransactionOptions()

        headers = self._headers(
            reference_id=options.reference_id or str(uuid.uuid4()),
            idempotency_key=options.idempotency_key,
        )
        reference_id = headers[REFERENCE_ID_HEADER]

        payload = self.payload_type(
            amount=formatted_amount,
            currency=options.currency or self._config.currency,
            external_id=options.external_id or str(uuid.uuid4()),
            payer_message=options.payer_message or self.default_payer_message,
            payee_note=options.payee_note or self.default_payee_note,
            **{self.counterparty: Party(party_id_type=PartyIdType.MSISDN, party_id=phone)},
        )
        self._post(f"{self.base_path}/{self.transaction_path}", payload, headers)
        logger.info(
            "MoMo %s %s accepted: reference_id=%s",
            self.product.value,
            self.transaction_path,
            reference_id,
        )
        return reference_id

    def _get_status(self, reference_id: str) -> TransactionStatusResponse:
        if not reference_id:
            raise ValidationError("reference id is required", field="reference_id")
        # Path segment; "/" and "?" must not alter the endpoint.
        segment = quote(reference_id, safe="")
        return self._get(
            f"{self.base_path}/{self.transaction_path}/{segment}",
            TransactionStatusResponse,
        )

    def get_account_balance(self) -> AccountBalance:
        """Get the available balance of the product account."""
        return self._get(f"{self.base_path}/account/balance", AccountBalance)

    def get_account_holder_info(self, phone: str) -> AccountHolderInfo:
        """Get basic information about the holder of a mobile number.

        Args:
            phone: Mobile number; normalised before sending

        Returns:
            AccountHolderInfo with name, birthdate, locale, gender and status
        """
        phone = quote(self._normalize_phone(phone), safe="")
        return self._get(
            f"{self.base_path}/accountholder/MSISDN/{phone}/basicuserinfo",
            AccountHolderInfo,
        )


__all__ = [
    "Amount",
    "ProductResource",
    "format_amount",
]
