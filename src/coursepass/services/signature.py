"""Wallet signature recovery for EIP-191 personal messages."""

from __future__ import annotations

import re

from eth_account import Account
from eth_account.messages import encode_defunct

from coursepass.core.errors import InvalidAddressError, SignatureMalformedError

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_address(value: str | None) -> bool:
    """Return True if ``value`` looks like a 20-byte hex address."""
    return isinstance(value, str) and ADDRESS_PATTERN.match(value) is not None


def normalize_address(value: str | None) -> str:
    """Validate and lowercase a wallet address.

    Raises:
        InvalidAddressError: If the value is not ``0x`` followed by 40 hex digits.
    """
    if value is None or not is_valid_address(value):
        raise InvalidAddressError()
    return value.lower()


def addresses_match(left: str, right: str) -> bool:
    """Compare two addresses case-insensitively."""
    return left.lower() == right.lower()


class SignatureVerifier:
    """Stateless signer recovery over the personal-message scheme."""

    @staticmethod
    def recover(message: str, signature: str | bytes) -> str:
        """Return the checksummed address that signed ``message``.

        A recovered address that differs from the one a caller expected is not
        an error here; callers compare with :func:`addresses_match`.

        Args:
            message: UTF-8 text exactly as the wallet displayed it.
            signature: 65-byte signature, raw or ``0x``-prefixed hex.

        Raises:
            SignatureMalformedError: If the signature cannot be decoded or recovery fails.
        """
        if not signature:
            raise SignatureMalformedError()
        try:
            return Account.recover_message(encode_defunct(text=message), signature=signature)
        except Exception as err:
            raise SignatureMalformedError() from err
