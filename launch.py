# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "speechlauncher",
# ]
#
# [tool.uv.sources]
# speechlauncher = { path = "." }
# ///
"""Standalone voice command launcher."""

from speechlauncher.apps.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
