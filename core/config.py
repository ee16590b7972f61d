from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_DATA_URL = "https://3snet.co/js_test/api.json"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class DashboardSettings:
    data_url: str = DEFAULT_DATA_URL
    request_timeout: float = DEFAULT_TIMEOUT
    locale: str = ""


def _as_timeout(value: Optional[str]) -> float:
    if value is None or not value.strip():
        return DEFAULT_TIMEOUT
    try:
        out = float(value)
    except ValueError:
        logger.warning("Invalid ADMIN_DASHBOARD_TIMEOUT %r, using %s", value, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    if out <= 0:
        logger.warning("Non-positive ADMIN_DASHBOARD_TIMEOUT %r, using %s", value, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    return out


def load_settings(environ: Optional[Mapping[str, str]] = None) -> DashboardSettings:
    """Read settings from the environment (after loading an optional .env file)."""
    if environ is None:
        load_dotenv()
        environ = os.environ
    return DashboardSettings(
        data_url=(environ.get("ADMIN_DASHBOARD_DATA_URL") or DEFAULT_DATA_URL).strip(),
        request_timeout=_as_timeout(environ.get("ADMIN_DASHBOARD_TIMEOUT")),
        locale=(environ.get("ADMIN_DASHBOARD_LOCALE") or "").strip(),
    )
