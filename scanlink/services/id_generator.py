"""Short identifier generation."""

import re
import secrets
import string
from typing import Optional

from scanlink.core.config import settings

ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase


class IdGenerator:
    """
    Produces fixed-length identifiers from the 62 character alphanumeric
    alphabet using the ``secrets`` CSPRNG (62**8 possible values).
    """
    
    def __init__(self, length: Optional[int] = None, alphabet: str = ALPHABET):
        self.length = length or settings.ID_LENGTH
        self.alphabet = alphabet
        self._pattern = re.compile(rf"^[0-9A-Za-z]{{{self.length}}}$")
    
    def generate(self) -> str:
        """Generate a random identifier."""
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))
    
    def is_valid_format(self, value) -> bool:
        """True iff ``value`` is exactly ``length`` characters from ``[0-9A-Za-z]``."""
        return isinstance(value, str) and self._pattern.fullmatch(value) is not None
