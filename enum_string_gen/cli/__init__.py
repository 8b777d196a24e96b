"""
cli — command-line interface for enum-string-gen.

Entry points
────────────
  python -m enum_string_gen   (via enum_string_gen/__main__.py)
  enum-string-gen             (via pyproject.toml [project.scripts])

Subcommands: generate | check | attributes
"""

from enum_string_gen.cli.main import build_parser, cmd_attributes, cmd_check, cmd_generate, main

__all__ = ["build_parser", "cmd_attributes", "cmd_check", "cmd_generate", "main"]
