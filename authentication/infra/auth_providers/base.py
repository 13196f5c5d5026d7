"""
Abstract base class for authentication providers.

The backend never issues credentials itself; it only verifies tokens minted
by an external identity provider.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class AuthProvider(ABC):
    """Interface for external authentication providers."""

    @abstractmethod
    def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verify the provider's access token.

        Returns:
            The verified claims (must include ``sub``) if valid, None otherwise.
        """
        pass
