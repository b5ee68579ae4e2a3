from __future__ import annotations

import base64
import json

from functools import lru_cache
from typing import Any

from cryptography.fernet import Fernet
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


KDF_SALT = b"bundleguard-session-v1"
KDF_ITERATIONS = 100_000




@lru_cache(maxsize=8)
def derive_key(secret: str) -> bytes:
  """Derive a Fernet key from an arbitrary secret string."""
  kdf = PBKDF2HMAC(
    algorithm=hashes.SHA256(),
    length=32,
    salt=KDF_SALT,
    iterations=KDF_ITERATIONS,
  )
  return base64.urlsafe_b64encode(kdf.derive(secret.encode("utf-8")))




class SessionCipher:
  """Symmetric encryption of credential records to a storable string."""

  def __init__(self, secret: str) -> None:
    self._fernet = Fernet(derive_key(secret))




  def encrypt(self, record: dict[str, Any]) -> str:
    plaintext = json.dumps(record, ensure_ascii=False).encode("utf-8")
    return self._fernet.encrypt(plaintext).decode("ascii")




  def decrypt(self, token: str) -> Any:
    """
    Decrypt and parse a stored string.
    Raises cryptography.fernet.InvalidToken or ValueError on bad input.
    """
    plaintext = self._fernet.decrypt(token.encode("utf-8"))
    return json.loads(plaintext.decode("utf-8"))
