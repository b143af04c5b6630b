"""
Shared type definitions.
"""

import logging
import datetime
import dataclasses

import requests

from bussched.const import API_BASE_URL, REQUEST_TIMEOUT


@dataclasses.dataclass
class ApiContext:
    """
    API Context.

    `tz` is the zone trips are displayed in; None means the system local zone.
    """

    logger: logging.Logger
    session: requests.Session
    base_url: str = API_BASE_URL
    timeout: float = REQUEST_TIMEOUT
    tz: datetime.tzinfo | None = None
