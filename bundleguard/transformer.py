"""
Post-build asset transformer.

Runs once after the production bundle has been moved into place:
- Deletes source maps (*.map) from the build script directory
- Obfuscates every remaining *.js file in place
- Leaves any other file untouched

Failures are not caught: a half-processed directory is fixed by rebuilding.
"""


from __future__ import annotations

import logging
import sys

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from bundleguard.config import Config
from bundleguard.obfuscator import obfuscate_source


LOG_FORMAT = "[%(levelname)s] %(message)s"

MAP_SUFFIX = ".map"
JS_SUFFIX = ".js"




@dataclass
class TransformSummary:
  maps_deleted: int = 0
  scripts_obfuscated: int = 0




def transform_directory(
  directory: Path,
  obfuscate: Optional[Callable[[str], str]] = None,
) -> TransformSummary:
  """Strip source maps and obfuscate scripts directly inside directory."""
  obfuscate = obfuscate or obfuscate_source
  summary = TransformSummary()

  for f in directory.iterdir():
    if not f.is_file():
      continue

    if f.name.endswith(MAP_SUFFIX):
      f.unlink()
      logging.info("Deleted MAP: %s", f.name)
      summary.maps_deleted += 1

    elif f.name.endswith(JS_SUFFIX):
      code = f.read_text(encoding="utf-8")
      f.write_text(obfuscate(code), encoding="utf-8")
      logging.info("Obfuscated: %s", f.name)
      summary.scripts_obfuscated += 1

  return summary




def _configure_logging() -> None:
  log_level = logging.DEBUG if Config.get("DEBUG", False) else logging.INFO
  logging.basicConfig(level=log_level, format=LOG_FORMAT, stream=sys.stdout)




def main() -> None:
  Config.load()
  _configure_logging()

  build_dir = Config.build_js_dir()
  summary = transform_directory(build_dir)

  logging.debug(
    "Processed %s: %d maps deleted, %d scripts obfuscated",
    build_dir,
    summary.maps_deleted,
    summary.scripts_obfuscated,
  )




if __name__ == "__main__":
  main()
