"""Short code generation.

Codes end up in public short URLs, so every character comes from the
operating system's CSPRNG via ``secrets``.
"""

import secrets
from typing import Optional

from urlshortener.core.config import settings


class CodeGenerator:
    """Produce fixed-length random codes over a fixed alphabet."""

    def __init__(self, length: Optional[int] = None, alphabet: Optional[str] = None):
        """
        Args:
            length: Number of characters per code (defaults to URL_CODE_LENGTH)
            alphabet: Characters to draw from (defaults to URL_CODE_CHARS)

        Raises:
            ValueError: If the length is not positive or the alphabet is empty
        """
        self.length = settings.URL_CODE_LENGTH if length is None else length
        self.alphabet = settings.URL_CODE_CHARS if alphabet is None else alphabet

        if self.length < 1:
            raise ValueError("Code length must be at least 1")
        if not self.alphabet:
            raise ValueError("Code alphabet must not be empty")

    def generate(self) -> str:
        """Return a new code; each character is drawn independently and uniformly."""
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))
