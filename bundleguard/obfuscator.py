"""
Adapter around the javascript-obfuscator command line tool.

Every run uses the same maximum-strength option set: each probabilistic
transform has its threshold pinned to 1 so it is applied everywhere.
"""


from __future__ import annotations

import logging
import re
import shlex
import subprocess
import tempfile

from pathlib import Path

from bundleguard.config import Config


OBFUSCATION_OPTIONS: dict[str, object] = {
  "compact": True,
  "controlFlowFlattening": True,
  "controlFlowFlatteningThreshold": 1,
  "deadCodeInjection": True,
  "deadCodeInjectionThreshold": 1,
  "stringArray": True,
  "stringArrayEncoding": ["base64"],
  "stringArrayThreshold": 1,
  "disableConsoleOutput": True,
}




class ObfuscationError(RuntimeError):
  """The obfuscator could not be started or exited with an error."""




def _flag_name(option: str) -> str:
  """controlFlowFlattening -> --control-flow-flattening"""
  return "--" + re.sub(r"(?<!^)(?=[A-Z])", "-", option).lower()




def _flag_value(value: object) -> str:
  if isinstance(value, bool):
    return "true" if value else "false"
  if isinstance(value, (list, tuple)):
    return ",".join(str(v) for v in value)
  return str(value)




def build_command(input_path: Path, output_path: Path) -> list[str]:
  """Return the argv obfuscating input_path into output_path."""
  cmd = shlex.split(Config.get("OBFUSCATOR_COMMAND"))
  cmd += [str(input_path), "--output", str(output_path)]

  for option, value in OBFUSCATION_OPTIONS.items():
    cmd += [_flag_name(option), _flag_value(value)]

  return cmd




def obfuscate_source(code: str) -> str:
  """Obfuscate a JavaScript source string and return the result."""
  with tempfile.TemporaryDirectory(prefix="bundleguard-") as tmp:
    input_path = Path(tmp) / "input.js"
    output_path = Path(tmp) / "output.js"
    input_path.write_text(code, encoding="utf-8")

    cmd = build_command(input_path, output_path)
    logging.debug("Running %s", shlex.join(cmd))

    try:
      result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
      raise ObfuscationError(f"Obfuscator not found: {cmd[0]}") from e

    if result.returncode != 0:
      raise ObfuscationError(
        f"Obfuscator exited with status {result.returncode}: {result.stderr.strip()}"
      )

    if not output_path.exists():
      raise ObfuscationError("Obfuscator produced no output")

    return output_path.read_text(encoding="utf-8")
