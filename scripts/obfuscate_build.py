#!/usr/bin/env python3
"""
Thin entry point for the post-build asset transformer.

Run as the last step of the production build chain:
  build -> move output to prod-build/ -> python scripts/obfuscate_build.py

All real logic lives in bundleguard/transformer.py
"""

import sys
from pathlib import Path

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def main() -> None:
    from bundleguard.transformer import main as transformer_main
    transformer_main()


if __name__ == "__main__":
    main()
