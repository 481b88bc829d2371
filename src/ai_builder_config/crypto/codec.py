"""AES-256-GCM encryption of single string values.

Envelope format: ``hex(nonce):hex(tag):hex(ciphertext)``.
"""

from __future__ import annotations

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from result import Err, Ok, Result

from .models import DecryptError

NONCE_BYTES = 12
TAG_BYTES = 16
ENVELOPE_SEPARATOR = ":"


def encrypt(plaintext: str, key: str) -> str:
    nonce = os.urandom(NONCE_BYTES)
    sealed = AESGCM(bytes.fromhex(key)).encrypt(nonce, plaintext.encode("utf-8"), None)
    # AESGCM appends the tag to the ciphertext
    ciphertext, tag = sealed[:-TAG_BYTES], sealed[-TAG_BYTES:]
    return ENVELOPE_SEPARATOR.join((nonce.hex(), tag.hex(), ciphertext.hex()))


def decrypt(envelope: str, key: str) -> Result[str, DecryptError]:
    parts = envelope.split(ENVELOPE_SEPARATOR)
    if len(parts) != 3:
        return Err(DecryptError(message="Invalid encrypted value format"))

    try:
        nonce, tag, ciphertext = (bytes.fromhex(part) for part in parts)
    except ValueError:
        return Err(DecryptError(message="Encrypted value is not valid hex"))

    if len(nonce) != NONCE_BYTES or len(tag) != TAG_BYTES:
        return Err(DecryptError(message="Encrypted value has an invalid nonce or tag length"))

    try:
        plaintext = AESGCM(bytes.fromhex(key)).decrypt(nonce, ciphertext + tag, None)
    except InvalidTag:
        return Err(DecryptError(message="Encrypted value failed authentication"))
    except ValueError as e:
        return Err(DecryptError(message=f"Failed to decrypt value: {e}"))

    try:
        return Ok(plaintext.decode("utf-8"))
    except UnicodeDecodeError:
        return Err(DecryptError(message="Decrypted value is not valid UTF-8"))
