"""Short link registration service.

This module contains the RegistrationService class which validates
destination URLs, issues unique identifiers and builds tracking URLs.
"""

import logging
import re
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from sqlmodel import SQLModel

from scanlink.core.config import settings
from scanlink.services.exceptions import ExhaustedRetriesError, ValidationError
from scanlink.services.id_generator import IdGenerator
from scanlink.storage.base import Storage
from scanlink.storage.exceptions import DuplicateIdError

logger = logging.getLogger(__name__)

SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
HIERARCHICAL_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


class RegisteredLink(SQLModel):
    """Outcome of a successful registration."""
    id: str
    tracking_url: str
    original_url: str


class RegistrationService:
    """
    Service for issuing short links.
    
    Identifier uniqueness is enforced by the storage insert itself; on a
    collision a fresh identifier is generated, up to ``max_attempts`` times.
    """
    
    def __init__(
        self,
        storage: Storage,
        id_generator: Optional[IdGenerator] = None,
        base_url: Optional[str] = None,
        max_attempts: Optional[int] = None,
    ):
        """
        Initialize the registration service.
        
        Args:
            storage: Storage backend
            id_generator: Identifier generator (default: 8 character alphanumeric)
            base_url: Domain tracking URLs are built on
            max_attempts: Identifier collision retry bound
        """
        self.storage = storage
        self.id_generator = id_generator or IdGenerator()
        self.base_url = (base_url or settings.SHORT_URL_DOMAIN).rstrip("/")
        self.max_attempts = max_attempts or settings.ID_MAX_ATTEMPTS
    
    async def create(
        self,
        url: Any,
        style_options: Optional[Dict[str, Any]] = None,
    ) -> RegisteredLink:
        """
        Register a destination URL under a new short identifier.
        
        Args:
            url: Absolute destination URL
            style_options: Opaque client payload stored alongside the link
            
        Returns:
            RegisteredLink with the identifier and tracking URL
            
        Raises:
            ValidationError: If the URL is missing or malformed
            ExhaustedRetriesError: If every attempt collided
            StorageError: If the storage backend fails
        """
        if not isinstance(url, str) or not url:
            raise ValidationError("Valid URL is required")
        
        if not self.is_valid_url(url):
            raise ValidationError("Invalid URL format")
        
        for attempt in range(1, self.max_attempts + 1):
            short_id = self.id_generator.generate()
            try:
                await self.storage.insert_short_link(short_id, url, style_options or {})
            except DuplicateIdError:
                logger.warning(f"Identifier collision on attempt {attempt}/{self.max_attempts}: {short_id}")
                continue
            
            logger.info(f"Short link created: {short_id} -> {url}")
            return RegisteredLink(
                id=short_id,
                tracking_url=self.tracking_url(short_id),
                original_url=url,
            )
        
        logger.error(f"Identifier generation exhausted after {self.max_attempts} attempts")
        raise ExhaustedRetriesError(self.max_attempts)
    
    def tracking_url(self, short_id: str) -> str:
        return f"{self.base_url}/r/{short_id}"
    
    @staticmethod
    def is_valid_url(url: str) -> bool:
        """
        Check that ``url`` is a well-formed absolute URL.
        
        Any scheme is accepted; web schemes additionally need a host,
        other schemes (``mailto:``, ``tel:``) need a non-empty body.
        """
        if any(ch.isspace() or ord(ch) < 0x20 for ch in url):
            return False
        
        try:
            parts = urlsplit(url)
            # Accessing port validates it
            parts.port
        except ValueError:
            return False
        
        if not parts.scheme or not SCHEME_PATTERN.match(parts.scheme):
            return False
        
        if parts.scheme.lower() in HIERARCHICAL_SCHEMES:
            return bool(parts.hostname)
        
        return bool(parts.netloc or parts.path)
