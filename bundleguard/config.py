from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any


DEFAULT_CONFIG = {
  "DEBUG": False,                                           # Enable verbose logging and disable response compression
  "BUILD_ROOT": "prod-build",                               # Where the production build is moved before processing
  "JS_SUBDIR": "static/js",                                 # Script directory inside BUILD_ROOT
  "OBFUSCATOR_COMMAND": "npx --yes javascript-obfuscator",  # javascript-obfuscator CLI invocation
  "SESSION_SECRET": "",                                     # Secret the session encryption key is derived from
  "SESSION_STORAGE_KEY": "user",                            # Session storage key holding the encrypted credentials
  "SECRET_KEY": "",                                         # Flask session cookie signing key
}

CONFIG_FILE_PATH = Path(__file__).parent / "config.json"




class Config:
  """
  Central configuration loader.
  Priority: environment variables > config.json > defaults.
  """

  values: dict[str, Any] = {}
  _loaded: bool = False




  @classmethod
  def load(cls) -> None:
    """Load configuration values. Only runs once."""
    if cls._loaded:
      return

    cls.values = DEFAULT_CONFIG.copy()

    if CONFIG_FILE_PATH.exists():
      try:
        with open(CONFIG_FILE_PATH, "r") as f:
          file_config = json.load(f)
          cls.values.update(file_config)
      except (OSError, ValueError) as e:
        logging.warning("Failed to read %s: %s", CONFIG_FILE_PATH, e)

    for key, default_val in DEFAULT_CONFIG.items():
      env_val = os.getenv(key)
      if env_val is not None:
        try:
          cls.values[key] = cls._cast_env_value(env_val, default_val)
        except ValueError:
          logging.warning("Could not cast environment variable %s='%s'", key, env_val)

    cls._loaded = True




  @classmethod
  def get(cls, key: str, default: Any = None) -> Any:
    """Retrieve a config value by key."""
    if not cls._loaded:
      cls.load()
    return cls.values.get(key, default)




  @classmethod
  def build_js_dir(cls) -> Path:
    """Directory holding the built scripts and their source maps."""
    return Path(cls.get("BUILD_ROOT")) / cls.get("JS_SUBDIR")




  @staticmethod
  def _cast_env_value(env_val: str, default_val: Any) -> Any:
    """Cast environment variable string to the type of default_val."""
    if isinstance(default_val, bool):
      return env_val.lower() in ("true", "1", "yes")
    if isinstance(default_val, int):
      return int(env_val)
    if isinstance(default_val, float):
      return float(env_val)
    return env_val
