"""
SRT Exceptions

Custom exception classes for the restricted token.
"""


class SRTException(Exception):
    """Base exception for SRT."""
    pass


class ConfigurationError(SRTException):
    """Configuration error."""
    pass


class InvalidAddressError(SRTException):
    """Invalid address format."""
    pass


class LedgerError(SRTException):
    """Base exception for token ledger operations."""
    pass


class InsufficientBalanceError(LedgerError):
    """Raised when sender balance is too low."""
    pass


class InsufficientAllowanceError(LedgerError):
    """Raised when spender allowance is too low."""
    pass


class TokenConstructionError(LedgerError):
    """Raised when a token cannot be constructed from the given parameters."""
    pass


class TransferRestrictedError(LedgerError):
    """
    Raised when a transfer is blocked by a restriction rule.

    Attributes:
        code: Numeric restriction code (never 0)
        message: Human-readable restriction message for *code*
    """

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __reduce__(self):
        return (type(self), (self.code, self.message))


class RestrictionRuleError(SRTException):
    """Raised when a restriction rule definition is invalid."""
    pass
