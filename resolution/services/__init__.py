"""Naming-service backends."""

from .base import NamingService
from .cns import Cns
from .ens import Ens

__all__ = ["NamingService", "Cns", "Ens"]
