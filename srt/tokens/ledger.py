"""
Fungible Ledger

Plain ERC-20–style balance ledger:
  - balanceOf / allowance / totalSupply views
  - transfer, approve, transferFrom
  - all-or-nothing batch transfer
  - in-memory event log (Transfer / Approval)

Amounts are integers in base units.  Every operation validates fully before
it mutates anything, so a failed call leaves balances, allowances, supply
and the event log untouched.
"""

import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from ..address import to_account
from ..constants import (
    SRT_DEFAULT_DECIMALS,
    SRT_MAX_BATCH_SIZE,
    SRT_MAX_DECIMALS,
    SRT_MAX_SUPPLY,
)
from ..exceptions import (
    InsufficientAllowanceError,
    InsufficientBalanceError,
    LedgerError,
    TokenConstructionError,
)
from ..logger import get_logger

logger = get_logger(__name__)


# ══════════════════════════════════════════════════════════════════════
#  EVENTS
# ══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TransferEvent:
    """Emitted on every successful transfer."""
    token_symbol: str
    sender: str
    recipient: str
    amount: int
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": "Transfer",
            "token": self.token_symbol,
            "from": self.sender,
            "to": self.recipient,
            "amount": str(self.amount),
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class ApprovalEvent:
    """Emitted on every successful approve."""
    token_symbol: str
    owner: str
    spender: str
    amount: int
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": "Approval",
            "token": self.token_symbol,
            "owner": self.owner,
            "spender": self.spender,
            "amount": str(self.amount),
            "timestamp": self.timestamp,
        }


def _require_amount(amount, what: str = "Transfer amount") -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise LedgerError(f"{what} must be an integer, got {amount!r}")
    if amount < 0:
        raise LedgerError(f"{what} cannot be negative")
    return amount


# ══════════════════════════════════════════════════════════════════════
#  FUNGIBLE LEDGER
# ══════════════════════════════════════════════════════════════════════

class FungibleLedger:
    """
    Fungible balance ledger.

    Mirrors ERC-20 semantics:
        - balance_of(address) → int
        - transfer(sender, recipient, amount)
        - approve(owner, spender, amount)
        - transfer_from(spender, sender, recipient, amount)
        - total_supply → int

    The caller is trusted to be *sender* (or *spender* for transfer_from);
    authentication lives outside the ledger.
    """

    def __init__(
        self,
        name: str,
        symbol: str,
        decimals: int = SRT_DEFAULT_DECIMALS,
        total_supply: int = 0,
        deployer: str = "",
    ):
        """
        Args:
            name: Human-readable token name
            symbol: Short ticker (e.g. "SRT")
            decimals: Fractional digits
            total_supply: Initial minted supply in base units
            deployer: Address credited with the initial supply
        """
        if not name:
            raise TokenConstructionError("Token name cannot be empty")
        if not symbol:
            raise TokenConstructionError("Token symbol cannot be empty")
        if isinstance(decimals, bool) or not isinstance(decimals, int):
            raise TokenConstructionError(f"Decimals must be an integer, got {decimals!r}")
        if decimals < 0 or decimals > SRT_MAX_DECIMALS:
            raise TokenConstructionError(f"Decimals must be 0-{SRT_MAX_DECIMALS}, got {decimals}")
        if isinstance(total_supply, bool) or not isinstance(total_supply, int):
            raise TokenConstructionError(f"Total supply must be an integer, got {total_supply!r}")
        if total_supply < 0:
            raise TokenConstructionError("Total supply cannot be negative")
        if total_supply > SRT_MAX_SUPPLY:
            raise TokenConstructionError(f"Total supply {total_supply} exceeds max {SRT_MAX_SUPPLY}")
        if total_supply > 0 and not deployer:
            raise TokenConstructionError("A deployer is required to hold the initial supply")

        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self._total_supply = total_supply
        self.deployer = to_account(deployer) if deployer else ""

        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}  # (owner, spender)
        self._events: List[Any] = []

        if total_supply > 0:
            self._balances[self.deployer] = total_supply

        self._created_at = time.time()
        logger.info(f"Token deployed: {symbol} ({name}), supply={total_supply}")

    # ── Read-only views ───────────────────────────────────────────────

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, address: str) -> int:
        return self._balances.get(to_account(address), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((to_account(owner), to_account(spender)), 0)

    @property
    def events(self) -> List[Any]:
        return list(self._events)

    def format_amount(self, amount: int) -> Decimal:
        """Base units → display units (e.g. 1500 with 3 decimals → 1.5)."""
        return Decimal(amount).scaleb(-self.decimals)

    # ── Core ERC-20 operations ────────────────────────────────────────

    def _move(self, sender: str, recipient: str, amount: int) -> TransferEvent:
        # Callers have already checked the balance.
        self._balances[sender] = self._balances.get(sender, 0) - amount
        self._balances[recipient] = self._balances.get(recipient, 0) + amount
        event = TransferEvent(
            token_symbol=self.symbol,
            sender=sender,
            recipient=recipient,
            amount=amount,
        )
        self._events.append(event)
        return event

    def transfer(self, sender: str, recipient: str, amount: int) -> TransferEvent:
        """
        Move *amount* from *sender* to *recipient*.

        Raises:
            InsufficientBalanceError: sender balance < amount
            LedgerError: negative or non-integer amount
            InvalidAddressError: malformed sender or recipient
        """
        sender = to_account(sender)
        recipient = to_account(recipient)
        amount = _require_amount(amount)

        bal = self._balances.get(sender, 0)
        if bal < amount:
            raise InsufficientBalanceError(
                f"{sender} balance {bal} < transfer amount {amount}"
            )

        event = self._move(sender, recipient, amount)
        logger.debug(f"Transfer: {sender} → {recipient} {amount} {self.symbol}")
        return event

    def approve(self, owner: str, spender: str, amount: int) -> ApprovalEvent:
        """Set spender allowance, replacing any previous value."""
        owner = to_account(owner)
        spender = to_account(spender)
        amount = _require_amount(amount, "Allowance amount")

        self._allowances[(owner, spender)] = amount

        event = ApprovalEvent(
            token_symbol=self.symbol,
            owner=owner,
            spender=spender,
            amount=amount,
        )
        self._events.append(event)
        logger.debug(f"Approve: {owner} → {spender} allowance={amount} {self.symbol}")
        return event

    def transfer_from(
        self,
        spender: str,
        sender: str,
        recipient: str,
        amount: int,
    ) -> TransferEvent:
        """
        Transfer on behalf of *sender* using spender's allowance.

        Raises:
            InsufficientBalanceError: sender balance < amount
            InsufficientAllowanceError: allowance(sender, spender) < amount
        """
        spender = to_account(spender)
        sender = to_account(sender)
        recipient = to_account(recipient)
        amount = _require_amount(amount)

        bal = self._balances.get(sender, 0)
        if bal < amount:
            raise InsufficientBalanceError(
                f"{sender} balance {bal} < transfer amount {amount}"
            )

        allow = self._allowances.get((sender, spender), 0)
        if allow < amount:
            raise InsufficientAllowanceError(
                f"Allowance {allow} < transfer amount {amount}"
            )

        self._allowances[(sender, spender)] = allow - amount
        event = self._move(sender, recipient, amount)
        logger.debug(
            f"transferFrom: spender={spender} {sender} → {recipient} {amount} {self.symbol}"
        )
        return event

    # ── Batch transfer ────────────────────────────────────────────────

    def _prepare_batch(
        self,
        sender: str,
        recipients: List[Tuple[str, int]],
    ) -> List[Tuple[str, int]]:
        """Validate a batch and return its normalized legs."""
        if len(recipients) > SRT_MAX_BATCH_SIZE:
            raise LedgerError(
                f"Batch size {len(recipients)} exceeds max {SRT_MAX_BATCH_SIZE}"
            )

        legs = [(to_account(r), _require_amount(a)) for r, a in recipients]
        total = sum(a for _, a in legs)
        bal = self._balances.get(sender, 0)
        if bal < total:
            raise InsufficientBalanceError(
                f"{sender} balance {bal} < batch total {total}"
            )
        return legs

    def batch_transfer(
        self,
        sender: str,
        recipients: List[Tuple[str, int]],
    ) -> List[TransferEvent]:
        """
        Transfer to multiple recipients. Either every leg is applied or none.
        """
        sender = to_account(sender)
        legs = self._prepare_batch(sender, recipients)
        return [self._move(sender, r, a) for r, a in legs]

    # ── Serialization ─────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
            "totalSupply": str(self._total_supply),
            "deployer": self.deployer,
            "holders": len([b for b in self._balances.values() if b > 0]),
            "createdAt": self._created_at,
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.symbol} supply={self._total_supply}>"
