"""
Transfer Restriction Engine

Decides whether a proposed transfer ``(sender, recipient, amount)`` is
allowed.  The engine is an ordered list of independent rules; ``detect``
returns the code of the first rule the transfer violates, or ``0`` when
none match.  Nothing here touches ledger state, so every query is safe to
call speculatively and any number of times.

Rule order (base rule set):
    1. ILLEGAL_TRANSFER_TO_ZERO_ADDRESS: recipient is the null address

New rules are appended after the base rules and keep their append order.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, Iterable, List, Optional

from ..address import is_null_address
from ..constants import (
    RESTRICTION_CODE_MAX,
    SUCCESS_CODE,
    SUCCESS_MESSAGE,
    UNKNOWN_RESTRICTION_MESSAGE,
    ZERO_ADDRESS_RESTRICTION_CODE,
    ZERO_ADDRESS_RESTRICTION_MESSAGE,
)
from ..exceptions import RestrictionRuleError
from ..logger import get_logger

logger = get_logger(__name__)

RestrictionPredicate = Callable[[str, str, int], bool]


class RestrictionCode(IntEnum):
    """Built-in restriction codes. Values are stable and never renumbered."""
    SUCCESS = SUCCESS_CODE
    ILLEGAL_TRANSFER_TO_ZERO_ADDRESS = ZERO_ADDRESS_RESTRICTION_CODE


@dataclass(frozen=True)
class RestrictionRule:
    """
    One predicate-and-code pair.

    Attributes:
        code:       Nonzero code returned when the rule is violated
        message:    Human-readable message for *code*
        predicate:  (sender, recipient, amount) → True if the transfer violates the rule
        name:       Short identifier used in logs
    """
    code: int
    message: str
    predicate: RestrictionPredicate
    name: str = ""

    def violated_by(self, sender: str, recipient: str, amount: int) -> bool:
        return bool(self.predicate(sender, recipient, amount))


def _recipient_is_null(sender: str, recipient: str, amount: int) -> bool:
    return is_null_address(recipient)


ZERO_ADDRESS_RULE = RestrictionRule(
    code=RestrictionCode.ILLEGAL_TRANSFER_TO_ZERO_ADDRESS,
    message=ZERO_ADDRESS_RESTRICTION_MESSAGE,
    predicate=_recipient_is_null,
    name="zero_address_recipient",
)

BASE_RULES = (ZERO_ADDRESS_RULE,)


class RestrictionEngine:
    """
    Ordered transfer restriction rules.

    Usage::

        engine = RestrictionEngine()
        code = engine.detect(sender, recipient, amount)
        if code != RestrictionCode.SUCCESS:
            raise TransferRestrictedError(code, engine.message_for(code))
    """

    def __init__(self, rules: Optional[Iterable[RestrictionRule]] = None):
        """
        Args:
            rules: Extra rules evaluated after the base rule set, in order.
        """
        self._rules: List[RestrictionRule] = []
        self._messages: Dict[int, str] = {SUCCESS_CODE: SUCCESS_MESSAGE}
        for rule in BASE_RULES:
            self.add_rule(rule)
        for rule in rules or ():
            self.add_rule(rule)

    # ── Rule management ───────────────────────────────────────────────

    def add_rule(self, rule: RestrictionRule) -> None:
        """
        Append *rule* to the end of the evaluation order.

        Raises:
            RestrictionRuleError: On code 0, out-of-range or duplicate code,
                                  or an empty message.
        """
        code = rule.code
        if isinstance(code, bool) or not isinstance(code, int):
            raise RestrictionRuleError(f"Restriction code must be an integer, got {code!r}")
        if code == SUCCESS_CODE:
            raise RestrictionRuleError("Restriction code 0 is reserved for SUCCESS")
        if code < 0 or code > RESTRICTION_CODE_MAX:
            raise RestrictionRuleError(
                f"Restriction code must be 1-{RESTRICTION_CODE_MAX}, got {code}"
            )
        if code in self._messages:
            raise RestrictionRuleError(f"Restriction code {code} already defined")
        if not rule.message:
            raise RestrictionRuleError(f"Restriction code {code} needs a message")

        self._rules.append(rule)
        self._messages[int(code)] = rule.message
        logger.debug(f"Restriction rule added: {rule.name or code} → {rule.message}")

    @property
    def rules(self) -> List[RestrictionRule]:
        return list(self._rules)

    def codes(self) -> Dict[int, str]:
        """All defined codes in evaluation order, SUCCESS first."""
        return dict(self._messages)

    # ── Queries ───────────────────────────────────────────────────────

    def detect(self, sender: str, recipient: str, amount: int) -> int:
        """
        Return the code of the first violated rule, or 0 if the transfer is allowed.
        """
        for rule in self._rules:
            if rule.violated_by(sender, recipient, amount):
                return int(rule.code)
        return SUCCESS_CODE

    def message_for(self, code) -> str:
        """
        Message for *code*. Any undefined or malformed code yields "UNKNOWN".
        """
        if isinstance(code, bool) or not isinstance(code, int):
            return UNKNOWN_RESTRICTION_MESSAGE
        return self._messages.get(code, UNKNOWN_RESTRICTION_MESSAGE)

    def __repr__(self) -> str:
        return f"<RestrictionEngine rules={len(self._rules)}>"


_base_engine = RestrictionEngine()


def detect_transfer_restriction(sender: str, recipient: str, amount: int) -> int:
    """Base rule set ``detect``."""
    return _base_engine.detect(sender, recipient, amount)


def message_for_transfer_restriction(code) -> str:
    """Base rule set ``message_for``."""
    return _base_engine.message_for(code)
