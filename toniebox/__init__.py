"""
Toniebox Python Client.

A synchronous Python client for the Tonie cloud, managing Creative-Tonie content.

Example:
    ```python
    from toniebox import TonieboxClient

    with TonieboxClient() as client:
        client.login("user@example.com", "password")

        for household in client.get_households():
            for tonie in client.get_creative_tonies(household):
                print(tonie.name, len(tonie.chapters))
    ```
"""

from toniebox.client import TonieboxClient
from toniebox.config import TonieboxConfig
from toniebox.exceptions import (
    APIError,
    AuthenticationError,
    InvalidCredentialsError,
    LoginError,
    NotFoundError,
    ResponseDecodeError,
    ServerError,
    StorageUploadError,
    TonieboxError,
    TonieNotBoundError,
    UnauthorizedError,
    UploadFileError,
)
from toniebox.models.auth import JWTToken, Me
from toniebox.models.tonies import Chapter, CreativeTonie, Household

__version__ = "0.1.0"

__all__ = [
    # Main client
    "TonieboxClient",
    "TonieboxConfig",
    # Models
    "JWTToken",
    "Me",
    "Household",
    "CreativeTonie",
    "Chapter",
    # Exceptions
    "TonieboxError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "LoginError",
    "APIError",
    "UnauthorizedError",
    "NotFoundError",
    "ServerError",
    "StorageUploadError",
    "ResponseDecodeError",
    "TonieNotBoundError",
    "UploadFileError",
]
