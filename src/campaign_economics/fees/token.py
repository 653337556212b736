"""Paying platform fees in the platform token.

Token balances come from the caller; this module never reads a chain.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import ROUND_CEILING, Decimal

from pydantic import BaseModel

from campaign_economics.domain.errors import ValidationError
from campaign_economics.domain.models import calculation_time
from campaign_economics.domain.money import quantize_money
from campaign_economics.tables import DEFAULT_TABLES, EconomicTables


class TokenPaymentEstimate(BaseModel, frozen=True):
    """Cost of settling a fee in platform tokens.

    Attributes:
        fee_in_usd: The undiscounted fee.
        fee_with_discount: The fee after the token discount.
        savings: ``fee_in_usd - fee_with_discount``.
        tokens_required: Whole tokens needed at ``token_price``, rounded up.
        token_price: USD price per token used for the conversion.
        balance: The payer's token balance.
        sufficient: Whether ``balance`` covers ``tokens_required``.
        valid_until: The quote expires at this time.
    """

    fee_in_usd: Decimal
    fee_with_discount: Decimal
    savings: Decimal
    tokens_required: Decimal
    token_price: Decimal
    balance: Decimal
    sufficient: bool
    valid_until: datetime


def token_discount_eligible(token_balance: Decimal, minimum_balance: Decimal) -> bool:
    """Return True if a holder's balance qualifies for the token discount."""
    return token_balance >= minimum_balance


def estimate_token_payment(
    service_fee: Decimal,
    token_balance: Decimal,
    *,
    tables: EconomicTables = DEFAULT_TABLES,
    now: datetime | None = None,
) -> TokenPaymentEstimate:
    """Quote a service fee in platform tokens.

    Args:
        service_fee: The fee in USD before the token discount.
        token_balance: The payer's current token balance.
        tables: Rate tables. Defaults to the published economic model.
        now: Quote time. Defaults to the current UTC time.

    Returns:
        A TokenPaymentEstimate valid for the configured estimate window.

    Raises:
        ValidationError: If the fee or balance is negative, or ``now`` is a
            naive datetime.
    """
    if service_fee < 0:
        raise ValidationError("service_fee", service_fee, "must not be negative")
    if token_balance < 0:
        raise ValidationError("token_balance", token_balance, "must not be negative")

    token = tables.fees.token
    discounted = quantize_money(service_fee * (Decimal("1") - token.discount_rate))
    tokens_required = (discounted / token.token_price).quantize(
        Decimal("1"), rounding=ROUND_CEILING
    )
    issued_at = calculation_time(now)

    return TokenPaymentEstimate(
        fee_in_usd=service_fee,
        fee_with_discount=discounted,
        savings=service_fee - discounted,
        tokens_required=tokens_required,
        token_price=token.token_price,
        balance=token_balance,
        sufficient=token_balance >= tokens_required,
        valid_until=issued_at + timedelta(minutes=tables.fees.estimate_validity_minutes),
    )
