from .base import AuthProvider
from .hosted import HostedJWTProvider

__all__ = ["AuthProvider", "HostedJWTProvider"]
