"""
Configuration classes for conllx.
"""

from dataclasses import dataclass


@dataclass
class ConllxConfig:
    """Codec settings shared by readers and writers."""
    encoding: str = "utf-8"  # Used for binary streams only; text streams are taken as-is
    errors: str = "strict"  # Codec error handler ('strict', 'replace', ...)
    newline: str = "\n"  # Line terminator emitted by the writer


