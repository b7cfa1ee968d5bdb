"""Credential check.

Webfleet has no session token: every request carries the credentials.
Logging in therefore means running a cheap action and letting the
transport surface an authentication failure.

Endpoint:
  - showUserReportExtern
"""

from __future__ import annotations

import logging

from pywebfleet._api._common import fetch_records
from pywebfleet._constants import USER_REPORT_ACTION
from pywebfleet._transport import Transport

_logger = logging.getLogger(__name__)


async def verify_credentials(transport: Transport) -> None:
    """Raise :class:`~pywebfleet.exceptions.WebfleetAuthenticationError` on bad credentials."""
    users = await fetch_records(transport, USER_REPORT_ACTION)
    _logger.debug("Credentials accepted (%d user row(s))", len(users))
