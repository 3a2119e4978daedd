"""Check whether a newer hexstack release is available.

The check is best-effort: any network or parsing problem is reported as
an UpdateCheckError and never blocks project creation.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from hexstack import __version__
from hexstack.config import HexstackConfig
from hexstack.errors import HexstackError

logger = logging.getLogger(__name__)

UPGRADE_COMMAND = "pip install --upgrade hexstack"


class UpdateCheckError(HexstackError):
    """Latest version could not be determined."""
    pass


@dataclass
class UpdateInfo:
    current: str
    latest: str

    @property
    def available(self) -> bool:
        return self.latest != self.current


def fetch_latest_version(
    config: Optional[HexstackConfig] = None,
    client: Optional[httpx.Client] = None,
) -> str:
    """Ask the package index for the latest released version.

    Args:
        config: Supplies the registry URL and timeout
        client: httpx.Client to use (a short-lived one is created if None)

    Raises:
        UpdateCheckError: If the request fails or the response is malformed
    """
    config = config or HexstackConfig()
    headers = {
        "Accept": "application/json",
        "User-Agent": f"hexstack/{__version__}",
    }

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=config.update_check_timeout)

    try:
        response = client.get(config.registry_url, headers=headers)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        raise UpdateCheckError(
            f"Version check failed with status {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise UpdateCheckError(f"Failed to fetch package info: {e}") from e
    except ValueError as e:
        raise UpdateCheckError(f"Failed to parse package info: {e}") from e
    finally:
        if owns_client:
            client.close()

    info = data.get("info") if isinstance(data, dict) else None
    version = info.get("version") if isinstance(info, dict) else None
    if not isinstance(version, str) or not version:
        raise UpdateCheckError("Invalid package info response format")
    return version


def check_for_update(
    config: Optional[HexstackConfig] = None,
    client: Optional[httpx.Client] = None,
) -> UpdateInfo:
    """Compare the running version with the latest release."""
    latest = fetch_latest_version(config, client)
    info = UpdateInfo(current=__version__, latest=latest)
    logger.debug("Installed %s, latest %s", info.current, info.latest)
    return info
