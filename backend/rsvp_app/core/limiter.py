"""Rate limiting configuration."""

from __future__ import annotations

import logging

from slowapi import Limiter
from slowapi.util import get_remote_address

from rsvp_app.core.config import settings

logger = logging.getLogger(__name__)

# Public RSVP endpoints are open to anyone holding an event id, so they are
# throttled per client address. Point RATE_LIMIT_STORAGE_URI at Redis when
# running several workers.
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
)
logger.debug(f"Rate limiter configured with {settings.RATE_LIMIT_STORAGE_URI}")
