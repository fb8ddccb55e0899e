"""
Blockchain domain resolution for Python
Convenience exports for the most common client APIs.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import NamingServiceSource, ResolutionSettings, get_settings  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    ConfigurationErrorCode,
    ResolutionError,
    ResolutionErrorCode,
    ResolutionSdkError,
    RpcError,
)

# Hashing
from .namehash import ZERO_HASH, childhash, labelhash, namehash  # noqa: F401

# Services & dispatch
from .services import Cns, Ens, NamingService  # noqa: F401
from .router import NamingServiceRouter  # noqa: F401
from .resolution import Resolution  # noqa: F401

# Logging
from .logging import get_logger, setup_logging  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "NamingServiceSource", "ResolutionSettings", "get_settings",
    "ResolutionSdkError", "ResolutionError", "ResolutionErrorCode",
    "ConfigurationError", "ConfigurationErrorCode", "RpcError",
    # Hashing
    "ZERO_HASH", "namehash", "childhash", "labelhash",
    # Services
    "NamingService", "Cns", "Ens", "NamingServiceRouter", "Resolution",
    # Logging
    "setup_logging", "get_logger",
]
