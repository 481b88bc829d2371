"""Key material and authenticated encryption for sensitive config values."""

from .codec import decrypt, encrypt
from .keys import KeyMaterial
from .models import DecryptError, KeyMaterialError

__all__ = [
    "DecryptError",
    "KeyMaterial",
    "KeyMaterialError",
    "decrypt",
    "encrypt",
]
