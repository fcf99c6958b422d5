"""
SRT Address Module

Account identifiers are 20-byte hex addresses (``0x`` + 40 hex chars),
stored in EIP-55 checksum form. The all-zero address is the distinguished
null address and can never hold funds.
"""

from eth_utils import (
    is_address,
    is_checksum_address,
    is_checksum_formatted_address,
    to_canonical_address,
    to_checksum_address,
)

from .constants import ADDRESS_LENGTH, ZERO_ADDRESS
from .exceptions import InvalidAddressError

_NULL_BYTES = b"\x00" * ADDRESS_LENGTH


def is_valid_address(address) -> bool:
    """
    Check if address is a well-formed hex address.

    Mixed-case input must carry a valid EIP-55 checksum.
    """
    if not isinstance(address, str):
        return False
    if not is_address(address):
        return False
    if is_checksum_formatted_address(address) and not is_checksum_address(address):
        return False
    return True


def to_account(address) -> str:
    """
    Normalize address to its checksum form.

    Raises:
        InvalidAddressError: If *address* is not a valid hex address
    """
    if not is_valid_address(address):
        raise InvalidAddressError(f"Invalid address: {address!r}")
    return to_checksum_address(address)


def is_null_address(address) -> bool:
    """
    Check whether *address* is the null address.

    Never raises; malformed input is simply not the null address.
    """
    if not is_valid_address(address):
        return False
    return to_canonical_address(address) == _NULL_BYTES


NULL_ADDRESS = to_checksum_address(ZERO_ADDRESS)
