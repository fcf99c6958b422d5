"""
Restricted Token

A fungible ledger whose every balance-moving entry point first asks the
restriction engine whether the transfer is allowed.  A nonzero code aborts
the whole call before any state changes and surfaces as
``TransferRestrictedError(code, message)``.

For callers that prefer explicit result values, ``try_transfer`` and
``try_transfer_from`` return a ``TransferOutcome`` tagged SUCCESS,
RESTRICTED or REJECTED instead of raising.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..constants import (
    SRT_DEFAULT_DECIMALS,
    SRT_MAX_BATCH_SIZE,
    SRT_MAX_DECIMALS,
    SUCCESS_CODE,
    SUCCESS_MESSAGE,
)
from ..exceptions import LedgerError, SRTException, TokenConstructionError, TransferRestrictedError
from ..logger import get_logger
from .ledger import FungibleLedger, TransferEvent
from .restrictions import RestrictionEngine, RestrictionRule

logger = get_logger(__name__)


class TransferStatus(Enum):
    """Outcome tag of a guarded transfer."""
    SUCCESS = "success"
    RESTRICTED = "restricted"   # blocked by a restriction rule
    REJECTED = "rejected"       # refused by the ledger (balance, allowance, input)


@dataclass(frozen=True)
class TransferOutcome:
    """
    Tagged result of ``try_transfer`` / ``try_transfer_from``.

    Attributes:
        status:   SUCCESS, RESTRICTED or REJECTED
        code:     Restriction code (0 unless RESTRICTED)
        message:  Restriction message, or the ledger error text when REJECTED
        event:    TransferEvent on success, else None
    """
    status: TransferStatus
    code: int
    message: str
    event: Optional[TransferEvent] = None

    @property
    def ok(self) -> bool:
        return self.status is TransferStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "code": self.code,
            "message": self.message,
            "event": self.event.to_dict() if self.event else None,
        }


class RestrictedToken(FungibleLedger):
    """
    Fungible token with transfer restrictions.

    Construction credits ``initial_supply * 10 ** decimals`` base units to
    *deployer*.  ``transfer``, ``transfer_from`` and ``batch_transfer`` are
    screened by the restriction engine before the ledger moves any balance.
    """

    def __init__(
        self,
        name: str,
        symbol: str,
        initial_supply: int,
        deployer: str,
        decimals: int = SRT_DEFAULT_DECIMALS,
        *,
        rules: Optional[Iterable[RestrictionRule]] = None,
    ):
        """
        Args:
            name: Human-readable token name
            symbol: Short ticker
            initial_supply: Whole-token supply, must be > 0
            deployer: Address credited with the full scaled supply
            decimals: Fractional digits
            rules: Extra restriction rules, evaluated after the base rules
        """
        if isinstance(initial_supply, bool) or not isinstance(initial_supply, int):
            raise TokenConstructionError(
                f"Initial supply must be an integer, got {initial_supply!r}"
            )
        if initial_supply <= 0:
            raise TokenConstructionError("Initial supply must be positive")
        # before scaling: 10 ** decimals is unbounded work
        if isinstance(decimals, bool) or not isinstance(decimals, int):
            raise TokenConstructionError(f"Decimals must be an integer, got {decimals!r}")
        if decimals < 0 or decimals > SRT_MAX_DECIMALS:
            raise TokenConstructionError(f"Decimals must be 0-{SRT_MAX_DECIMALS}, got {decimals}")

        self._engine = RestrictionEngine(rules)
        super().__init__(
            name=name,
            symbol=symbol,
            decimals=decimals,
            total_supply=initial_supply * 10 ** decimals,
            deployer=deployer,
        )

    # ── Restriction queries ───────────────────────────────────────────

    @property
    def restriction_engine(self) -> RestrictionEngine:
        return self._engine

    def detect_transfer_restriction(self, sender: str, recipient: str, amount: int) -> int:
        """Code the transfer would fail with, or 0. Read-only."""
        return self._engine.detect(sender, recipient, amount)

    def message_for_transfer_restriction(self, code) -> str:
        return self._engine.message_for(code)

    # ── Guard ─────────────────────────────────────────────────────────

    def _require_transfer_allowed(self, sender: str, recipient: str, amount: int) -> None:
        code = self._engine.detect(sender, recipient, amount)
        if code != SUCCESS_CODE:
            message = self._engine.message_for(code)
            logger.warning(
                f"Transfer restricted: {sender} → {recipient} {amount} {self.symbol} "
                f"code={code} {message}"
            )
            raise TransferRestrictedError(code, message)

    # ── Guarded ERC-20 operations ─────────────────────────────────────

    def transfer(self, sender: str, recipient: str, amount: int) -> TransferEvent:
        """
        Screened transfer.

        Raises:
            TransferRestrictedError: a restriction rule blocked the transfer
            InsufficientBalanceError: sender balance < amount
        """
        self._require_transfer_allowed(sender, recipient, amount)
        return super().transfer(sender, recipient, amount)

    def transfer_from(
        self,
        spender: str,
        sender: str,
        recipient: str,
        amount: int,
    ) -> TransferEvent:
        """
        Screened transferFrom. The restriction applies to the movement
        (sender → recipient), not to the spender.
        """
        self._require_transfer_allowed(sender, recipient, amount)
        return super().transfer_from(spender, sender, recipient, amount)

    def batch_transfer(
        self,
        sender: str,
        recipients: List[Tuple[str, int]],
    ) -> List[TransferEvent]:
        """
        Screened batch transfer. Every leg is checked before any leg is
        applied; the first restricted leg aborts the whole batch.
        """
        recipients = list(recipients)
        if len(recipients) > SRT_MAX_BATCH_SIZE:
            raise LedgerError(
                f"Batch size {len(recipients)} exceeds max {SRT_MAX_BATCH_SIZE}"
            )
        for recipient, amount in recipients:
            self._require_transfer_allowed(sender, recipient, amount)
        return super().batch_transfer(sender, recipients)

    # ── Result-value variants ─────────────────────────────────────────

    def _outcome(self, fn, *args) -> TransferOutcome:
        try:
            event = fn(*args)
        except TransferRestrictedError as e:
            return TransferOutcome(TransferStatus.RESTRICTED, e.code, e.message)
        except SRTException as e:
            return TransferOutcome(TransferStatus.REJECTED, SUCCESS_CODE, str(e))
        return TransferOutcome(TransferStatus.SUCCESS, SUCCESS_CODE, SUCCESS_MESSAGE, event)

    def try_transfer(self, sender: str, recipient: str, amount: int) -> TransferOutcome:
        """``transfer`` returning a TransferOutcome instead of raising."""
        return self._outcome(self.transfer, sender, recipient, amount)

    def try_transfer_from(
        self,
        spender: str,
        sender: str,
        recipient: str,
        amount: int,
    ) -> TransferOutcome:
        """``transfer_from`` returning a TransferOutcome instead of raising."""
        return self._outcome(self.transfer_from, spender, sender, recipient, amount)

    # ── Serialization ─────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["restrictions"] = {str(c): m for c, m in self._engine.codes().items()}
        return d
