"""
Loading the raw ledger JSON from a local file or an HTTP endpoint.
"""
import json
from pathlib import Path
from typing import Any, List, Optional

import requests
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from core.config import get_settings
from core.exceptions import DataNotFoundError, LedgerFormatError, LedgerLoadError
from core.logger import setup_logger

logger = setup_logger(__name__)


def is_remote(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    reraise=True
)
def _get(url: str, timeout: int) -> requests.Response:
    return requests.get(url, timeout=timeout, headers={"Accept": "application/json"})


def fetch_ledger(url: str, timeout: Optional[int] = None) -> Any:
    """
    Fetch the ledger JSON over HTTP.

    Connection errors and timeouts are retried; HTTP error statuses are not.

    Args:
        url: Ledger URL
        timeout: Request timeout in seconds (defaults to FETCH_TIMEOUT)

    Returns:
        Decoded JSON payload

    Raises:
        LedgerLoadError: If the request fails or returns an error status
        LedgerFormatError: If the body is not valid JSON
    """
    timeout = timeout or get_settings().fetch_timeout
    logger.info(f"Fetching ledger from {url}")

    try:
        response = _get(url, timeout)
    except requests.RequestException as e:
        logger.error(f"Failed to fetch ledger from {url}: {e}")
        raise LedgerLoadError(
            f"Could not load {url}",
            details={"source": url, "error": str(e)}
        )

    if not response.ok:
        raise LedgerLoadError(
            f"Could not load {url} (HTTP {response.status_code})",
            details={"source": url, "status_code": response.status_code}
        )

    try:
        return response.json()
    except ValueError as e:
        raise LedgerFormatError(
            f"{url} did not return valid JSON",
            details={"source": url, "error": str(e)}
        )


def read_ledger_file(file_path: str) -> Any:
    """
    Read the ledger JSON from disk.

    Raises:
        DataNotFoundError: If the file doesn't exist
        LedgerLoadError: If the file can't be read
        LedgerFormatError: If the file is not valid JSON
    """
    path = Path(file_path)
    if not path.exists():
        raise DataNotFoundError(
            f"File not found: {file_path}",
            details={"file_path": file_path}
        )

    logger.info(f"Reading ledger from {path.name}")

    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise LedgerFormatError(
            f"{path.name} is not valid JSON",
            details={"file_path": file_path, "line": e.lineno, "error": e.msg}
        )
    except OSError as e:
        raise LedgerLoadError(
            f"Could not read {path.name}",
            details={"file_path": file_path, "error": str(e)}
        )


def load_ledger_source(source: Optional[str] = None) -> List[Any]:
    """
    Load the raw ledger array from ``source`` (path or URL).

    Args:
        source: Ledger location, defaults to the DATA_SOURCE setting

    Returns:
        The decoded JSON array

    Raises:
        LedgerFormatError: If the payload is not a JSON array
    """
    source = source or get_settings().data_source
    payload = fetch_ledger(source) if is_remote(source) else read_ledger_file(source)

    if not isinstance(payload, list):
        raise LedgerFormatError(
            f"{source} must contain a JSON array [...]",
            details={"source": source, "received_type": type(payload).__name__}
        )

    logger.info(f"Loaded {len(payload)} raw ledger entries from {source}")
    return payload
