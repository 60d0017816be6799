"""
Request-token signing.

Uses Ed25519 (via ``cryptography``) so the downstream application only needs
the public key to check that this gateway vouched for a token. Ed25519
signatures are deterministic: the same key and token always produce the
same 64 bytes.
"""

from __future__ import annotations

import base64
import binascii

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from errors import ConfigurationError

SIGNING_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64


def decode_signing_key(encoded: str) -> bytes:
    """Decode a base64 Ed25519 seed.

    Args:
        encoded: Standard (padded) base64 of exactly 32 bytes.

    Returns:
        The 32 raw key bytes.

    Raises:
        ConfigurationError: if the value is empty, not base64 (surrounding
            whitespace included), or decodes to anything other than 32 bytes.
    """
    if not encoded:
        raise ConfigurationError("Private key is not set.")
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ConfigurationError("Invalid private key.") from None
    if len(raw) != SIGNING_KEY_LENGTH:
        raise ConfigurationError("Invalid private key length.")
    return raw


class TokenSigner:
    """Signs opaque request tokens with a fixed Ed25519 key."""

    def __init__(self, key: bytes) -> None:
        if len(key) != SIGNING_KEY_LENGTH:
            raise ConfigurationError("Invalid private key length.")
        self._private_key = Ed25519PrivateKey.from_private_bytes(key)
        self._public_key = self._private_key.public_key()

    @classmethod
    def from_base64(cls, encoded: str) -> "TokenSigner":
        return cls(decode_signing_key(encoded))

    def sign(self, token: str) -> bytes:
        """Return the 64-byte signature over the UTF-8 bytes of *token*."""
        return self._private_key.sign(token.encode("utf-8"))

    def sign_hex(self, token: str) -> str:
        return self.sign(token).hex()

    @property
    def public_key_bytes(self) -> bytes:
        return self._public_key.public_bytes(Encoding.Raw, PublicFormat.Raw)

    @property
    def public_key_hex(self) -> str:
        return self.public_key_bytes.hex()

    def verify(self, token: str, signature_hex: str) -> bool:
        """Check *signature_hex* against *token* with this signer's public key.

        Returns:
            ``True`` if the signature is valid, ``False`` for any failure
            (bad hex, wrong length, wrong token).
        """
        try:
            signature = bytes.fromhex(signature_hex)
        except ValueError:
            return False
        if len(signature) != SIGNATURE_LENGTH:
            return False
        try:
            self._public_key.verify(signature, token.encode("utf-8"))
        except InvalidSignature:
            return False
        return True

    def __repr__(self) -> str:
        return f"TokenSigner(public_key={self.public_key_hex})"
