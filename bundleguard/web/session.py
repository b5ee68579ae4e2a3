from flask import current_app, g, session

from bundleguard.session import SessionStore


SESSION_CIPHER_EXTENSION = "bundleguard.session_cipher"



def get_session_store() -> SessionStore:
  """Per-request store persisting to the client's session cookie."""
  if "session_store" not in g:
    cipher = current_app.extensions[SESSION_CIPHER_EXTENSION]
    g.session_store = SessionStore(session, cipher)
  return g.session_store
