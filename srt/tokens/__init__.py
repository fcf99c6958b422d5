"""
SRT Token Package

Provides:
  - RestrictedToken    : Fungible token whose transfers are screened by restriction rules
  - RestrictionEngine  : Ordered restriction rules → restriction code / message
  - FungibleLedger     : Underlying ERC-20–style balance ledger
"""

from .ledger import (
    FungibleLedger,
    TransferEvent,
    ApprovalEvent,
)
from .restrictions import (
    RestrictionCode,
    RestrictionEngine,
    RestrictionRule,
    ZERO_ADDRESS_RULE,
    detect_transfer_restriction,
    message_for_transfer_restriction,
)
from .restricted import (
    RestrictedToken,
    TransferOutcome,
    TransferStatus,
)

__all__ = [
    # Ledger
    "FungibleLedger",
    "TransferEvent",
    "ApprovalEvent",
    # Restrictions
    "RestrictionCode",
    "RestrictionEngine",
    "RestrictionRule",
    "ZERO_ADDRESS_RULE",
    "detect_transfer_restriction",
    "message_for_transfer_restriction",
    # Restricted token
    "RestrictedToken",
    "TransferOutcome",
    "TransferStatus",
]
