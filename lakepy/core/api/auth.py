"""
Access token providers.

Token acquisition and refresh live outside lakepy; the client only asks
a provider for a bearer token before every request.
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class AccessTokenProvider(Protocol):
    """Protocol for objects that hand out bearer tokens."""

    async def get_token(self) -> str:
        """
        Return a bearer token valid for the next request.

        Returns:
            Raw token string (without the ``Bearer`` prefix)
        """
        ...


class StaticTokenProvider:
    """
    Provider returning the same token on every call.

    Useful for:
    - Unit testing
    - CLI usage with a token obtained elsewhere

    Example:
        >>> provider = StaticTokenProvider("eyJ0eXAi...")
        >>> token = await provider.get_token()
    """

    def __init__(self, token: str):
        if not token:
            raise ValueError("Token cannot be empty")
        self._token = token

    async def get_token(self) -> str:
        return self._token
