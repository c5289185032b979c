"""Versioned account classification rule tables shipped with the package."""

from pathlib import Path

RULES_DIR = Path(__file__).resolve().parent

BUILTIN_TABLES = {
    "default": RULES_DIR / "default.yaml",
    "legacy": RULES_DIR / "legacy.yaml",
}

__all__ = ["RULES_DIR", "BUILTIN_TABLES"]
