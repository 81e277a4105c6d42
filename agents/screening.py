import logging
from functools import lru_cache

from veria import VeriaClient, VeriaConfig, VeriaError, ScreenResult

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def get_client() -> VeriaClient:
    """Return the process-wide client, configured from the environment."""
    return VeriaClient(config=VeriaConfig.from_env())


def run_sanction_screen(address: str) -> ScreenResult:
    """Run a sanction screen for the given address.

    Returns the screening result from Veria unchanged.
    """
    try:
        return get_client().screen(address)
    except VeriaError as exc:
        logger.error("Failed to screen address %s: code=%s status=%s %s", address, exc.code, exc.status_code, exc)
        raise
