"""Test utilities for scanlink tests."""

import random
import string
from typing import Optional

from scanlink.models.short_link import ShortLinkRead
from scanlink.services.id_generator import ALPHABET
from scanlink.storage.base import Storage


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_id() -> str:
    """Generate a well-formed short identifier."""
    return ''.join(random.choice(ALPHABET) for _ in range(8))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


async def create_test_link(
    storage: Storage,
    id: Optional[str] = None,
    original_url: Optional[str] = None,
    style_options: Optional[dict] = None,
) -> ShortLinkRead:
    """Create and persist a test short link."""
    return await storage.insert_short_link(
        id or random_id(),
        original_url or random_url(),
        style_options,
    )


async def record_scans(storage: Storage, qr_id: str, ip: Optional[str], count: int, user_agent: str = "pytest") -> None:
    """Append ``count`` scans from the same address."""
    for _ in range(count):
        await storage.insert_scan(qr_id, ip, user_agent)
