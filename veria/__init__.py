"""Python client for the Veria compliance screening API.

Usage::

    from veria import VeriaClient

    client = VeriaClient(api_key="veria_live_xxx")
    result = client.screen("vitalik.eth")
    print(result["risk"], result["score"])
"""

from .client import VeriaClient
from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS, VeriaConfig
from .decision import should_block
from .errors import VeriaError
from .models import RiskLevel, ScreenDetails, ScreenResult

__all__ = [
    "VeriaClient",
    "VeriaConfig",
    "VeriaError",
    "ScreenResult",
    "ScreenDetails",
    "RiskLevel",
    "should_block",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_MS",
]

__version__ = "0.1.0"
