"""Infrastructure models package exports."""
from .base import Base, metadata
from .pix_transaction import PixTransactionModel

__all__ = [
    "Base",
    "metadata",
    "PixTransactionModel",
]
