from __future__ import annotations

import logging

from collections.abc import Mapping, MutableMapping
from typing import Any, Optional

from cryptography.fernet import InvalidToken
from pubsub import pub

from bundleguard.config import Config
from bundleguard.session.crypto import SessionCipher


SESSION_CHANGED_TOPIC = "bundleguard.session.changed"
REQUIRED_FIELDS = ("token", "id", "email")
DEV_SESSION_SECRET = "bundleguard-development-secret"




def create_cipher() -> SessionCipher:
  """Build the cipher from the configured secret."""
  secret: str = Config.get("SESSION_SECRET")
  if not secret:
    logging.warning("SESSION_SECRET is not set; using the development secret")
    secret = DEV_SESSION_SECRET
  return SessionCipher(secret)




def validate_record(record: Any) -> dict[str, Any]:
  """Return a copy of record, raising ValueError if it is not a credential record."""
  if not isinstance(record, Mapping):
    raise ValueError("Credential record must be a mapping")

  missing = [field for field in REQUIRED_FIELDS if record.get(field) is None]
  if missing:
    raise ValueError(f"Credential record is missing: {', '.join(missing)}")

  return dict(record)




class SessionStore:
  """
  In-memory holder of the signed-in user's credentials.
  Every change is published on SESSION_CHANGED_TOPIC, where
  persist_session_change writes it to session storage.
  """

  def __init__(
    self,
    storage: MutableMapping[str, str],
    cipher: SessionCipher,
    storage_key: Optional[str] = None,
  ) -> None:
    self.storage = storage
    self.cipher = cipher
    self.storage_key: str = storage_key or Config.get("SESSION_STORAGE_KEY")
    self.user: Optional[dict[str, Any]] = None




  def set_user(self, record: Mapping[str, Any]) -> dict[str, Any]:
    self.user = validate_record(record)
    self._publish()
    return self.user




  def clear(self) -> None:
    self.user = None
    self._publish()




  def restore(self) -> Optional[dict[str, Any]]:
    """
    Load the record persisted by a previous request or page load.
    Anything that cannot be decrypted and parsed counts as no session.
    """
    token = self.storage.get(self.storage_key)
    if token is None:
      self.user = None
      return None

    try:
      if not isinstance(token, str):
        raise ValueError(f"Stored session is {type(token).__name__}, not str")
      self.user = validate_record(self.cipher.decrypt(token))
    except (InvalidToken, ValueError) as e:
      logging.warning("Discarding unreadable stored session: %s", str(e) or type(e).__name__)
      self.storage.pop(self.storage_key, None)
      self.user = None

    return self.user




  def _publish(self) -> None:
    pub.sendMessage(SESSION_CHANGED_TOPIC, store=self, record=self.user)




def persist_session_change(store: SessionStore, record: Optional[dict[str, Any]]) -> None:
  """Encrypt-and-persist hook shared by every SessionStore."""
  if record is None:
    store.storage.pop(store.storage_key, None)
    logging.debug("Removed stored session")
    return

  store.storage[store.storage_key] = store.cipher.encrypt(record)
  logging.debug("Stored encrypted session")


pub.subscribe(persist_session_change, SESSION_CHANGED_TOPIC)
