from __future__ import annotations

import locale
import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional

import requests
from pydantic import ValidationError

from core.config import DEFAULT_TIMEOUT
from core.schemas import ApiResponse, Dataset

logger = logging.getLogger(__name__)

FetchStatus = Literal["loading", "error", "loaded"]

NETWORK_ERROR_MESSAGE = "Network response was not ok"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


class DataFetchError(Exception):
    """Raised when the dashboard payload cannot be fetched or understood."""


@dataclass(frozen=True)
class FetchState:
    status: FetchStatus = "loading"
    dataset: Optional[Dataset] = None
    error: Optional[str] = None

    @classmethod
    def loaded(cls, dataset: Dataset) -> "FetchState":
        return cls(status="loaded", dataset=dataset)

    @classmethod
    def failed(cls, message: str) -> "FetchState":
        return cls(status="error", error=message or UNKNOWN_ERROR_MESSAGE)


def parse_payload(payload: Any) -> Dataset:
    try:
        response = ApiResponse.model_validate(payload)
    except ValidationError as exc:
        raise DataFetchError(f"Unexpected payload shape ({exc.error_count()} validation errors)") from exc
    if not response.success:
        logger.warning("Payload reports success=false; rendering the data it carries")
    return response.data


def fetch_dataset(url: str, *, timeout: float = DEFAULT_TIMEOUT) -> Dataset:
    """Perform the single GET for the dashboard payload and parse it."""
    logger.info("Fetching dashboard data from %s", url)
    response = requests.get(url, headers={"Accept": "application/json"}, timeout=timeout)
    if not response.ok:
        logger.error("HTTP error %s: GET %s", response.status_code, url)
        raise DataFetchError(NETWORK_ERROR_MESSAGE)
    try:
        payload = response.json()
    except ValueError as exc:
        raise DataFetchError(f"Invalid JSON payload: {exc}") from exc
    dataset = parse_payload(payload)
    logger.info("Loaded %d admin rows and %d total months", len(dataset.rows), len(dataset.totals))
    return dataset


def load_dataset_state(url: str, *, timeout: float = DEFAULT_TIMEOUT) -> FetchState:
    """Fetch once and convert every failure into an ``error`` state."""
    try:
        return FetchState.loaded(fetch_dataset(url, timeout=timeout))
    except DataFetchError as exc:
        logger.error("Dashboard data unusable: %s", exc)
        return FetchState.failed(str(exc))
    except requests.RequestException as exc:
        logger.error("Request to %s failed: %s", url, exc)
        return FetchState.failed(str(exc))
    except Exception as exc:
        logger.exception("load_dataset_state failed")
        return FetchState.failed(str(exc))


def apply_locale(name: str) -> bool:
    """Switch the process locale; an empty name keeps the current one."""
    if not name:
        return False
    try:
        locale.setlocale(locale.LC_ALL, name)
    except locale.Error:
        logger.warning("Locale %r is not available, keeping %r", name, locale.setlocale(locale.LC_ALL))
        return False
    return True


def format_number(value: Optional[float]) -> Optional[str]:
    """Format as an integer with the locale's thousands separator (``,`` when it has none)."""
    if value is None:
        return None
    sep = locale.localeconv().get("thousands_sep") or ","
    return f"{int(round(value)):,}".replace(",", sep)
