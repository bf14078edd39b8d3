"""
Payment specific codes and the PIX provider status vocabulary.
"""
from __future__ import annotations

from enum import IntEnum


class PaymentCode(IntEnum):
    # Generic success
    SUCCESS = 0

    # Provider/Network errors (6xxxx)
    PROVIDER_ERROR = 60000
    TRANSPORT_ERROR = 60001


# Statuses FairPayments reports for a PIX transaction. Kept for logging and
# documentation only: unknown statuses are still accepted and forwarded.
PIX_TRANSACTION_STATUSES = frozenset({
    "waiting_payment",
    "pending",
    "processing",
    "authorized",
    "paid",
    "refused",
    "canceled",
    "refunded",
    "chargedback",
    "failed",
    "expired",
})
