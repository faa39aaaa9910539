"""
Toniebox client facade.

This is the main entry point for users of the library. It wires the HTTP
client and the services together behind a small synchronous API.
"""

import dataclasses
from pathlib import Path
from typing import Self

import httpx
import structlog

from toniebox.api.endpoints.households import get_households
from toniebox.api.endpoints.user import get_me
from toniebox.api.http_client import HttpClient
from toniebox.config import TonieboxConfig
from toniebox.models.auth import JWTToken, Me
from toniebox.models.tonies import Chapter, CreativeTonie, Household
from toniebox.services.auth_service import AuthService
from toniebox.services.tonie_service import CreativeTonieService
from toniebox.services.upload_service import UploadService

logger = structlog.get_logger(__name__)


class TonieboxClient:
    """
    Synchronous client for the Tonie cloud.

    Every call blocks until its single request completes. An instance is not
    thread-safe; guard it with a lock if several threads share it.

    Example:
        ```python
        with TonieboxClient() as client:
            client.login("user@example.com", "password")

            household = client.get_households()[0]
            tonie = client.get_creative_tonies(household)[0]

            tonie.upload_file("story.mp3", "My Story")
            tonie.name = "Bedtime"
            tonie.commit()
        ```

    Args:
        config: Client configuration. Uses defaults if not provided.
        proxy: Proxy URL, shortcut for ``TonieboxConfig(proxy=...)``.
        transport: Optional httpx transport for testing (mock transport).
            Cannot be combined with a proxy: httpx routes proxied requests
            through its own proxy transport, bypassing this one.

    Raises:
        ValueError: If the proxy URL is malformed.
    """

    def __init__(
        self,
        config: TonieboxConfig | None = None,
        *,
        proxy: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        config = config or TonieboxConfig()
        if proxy is not None:
            config = dataclasses.replace(config, proxy=proxy)
        self._config = config

        self._http = HttpClient(self._config, transport=transport)
        self._auth_service = AuthService(self._http)
        self._tonie_service = CreativeTonieService(self._http, UploadService(self._http))

    def __enter__(self) -> Self:
        """Enter context."""
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        """Exit context."""
        self.close()

    def close(self) -> None:
        """Close the client and release the connection pool. The token is dropped."""
        self._http.clear_token()
        self._http.close()
        logger.debug("Client closed")

    @property
    def config(self) -> TonieboxConfig:
        return self._config

    @property
    def is_authenticated(self) -> bool:
        """Check if a token is held."""
        return self._auth_service.is_authenticated

    @property
    def token(self) -> JWTToken | None:
        """Token used for authenticated requests, e.g. to store and reuse it later."""
        return self._auth_service.token

    def login(self, username: str, password: str) -> JWTToken:
        """
        Authenticate with Toniebox account credentials.

        Args:
            username: Account email address.
            password: Account password.

        Returns:
            The token, which can be handed to set_token() on another client.

        Raises:
            InvalidCredentialsError: If username or password is empty.
            LoginError: If the credentials are rejected.
        """
        return self._auth_service.login(username, password)

    def set_token(self, token: JWTToken) -> None:
        """
        Authenticate with a token obtained earlier instead of credentials.

        Example:
            ```python
            token = TonieboxClient().login(username, password)

            client = TonieboxClient()
            client.set_token(token)
            client.get_me()
            ```
        """
        self._auth_service.set_token(token)

    def disconnect(self) -> None:
        """Terminate the session on the server."""
        self._auth_service.disconnect()

    def get_me(self) -> Me:
        """Get the profile of the authenticated user."""
        return get_me(self._http)

    def get_households(self) -> list[Household]:
        """Get all households the user belongs to."""
        return get_households(self._http)

    def get_creative_tonies(self, household: Household) -> list[CreativeTonie]:
        """
        Get all Creative-Tonies of a household.

        Example:
            ```python
            for tonie in client.get_creative_tonies(household):
                print(tonie.name, tonie.chapters_present)
            ```
        """
        return self._tonie_service.list_creative_tonies(household)

    def get_creative_tonie(self, household: Household, tonie_id: str) -> CreativeTonie:
        """Get a single Creative-Tonie by id."""
        return self._tonie_service.get_creative_tonie(household, tonie_id)

    def refresh(self, tonie: CreativeTonie) -> None:
        """
        Reload a Creative-Tonie in place (e.g. to follow transcoding).

        Raises:
            TonieNotBoundError: If the tonie was not obtained from a client.
        """
        tonie.refresh()

    def commit(self, tonie: CreativeTonie, *, force: bool = False) -> bool:
        """
        Save a Creative-Tonie's local changes.

        Args:
            tonie: Tonie to save.
            force: Send it even if no local change was recorded.

        Returns:
            True if the tonie was sent.

        Raises:
            TonieNotBoundError: If the tonie was not obtained from a client.
        """
        return tonie.commit(force=force)

    def upload_file(self, tonie: CreativeTonie, path: str | Path, title: str) -> Chapter:
        """
        Upload an audio file as a new chapter of a Creative-Tonie.

        Call commit() afterwards to persist the new chapter list.

        Raises:
            TonieNotBoundError: If the tonie was not obtained from a client.
            UploadFileError: If the file cannot be read.
        """
        return tonie.upload_file(path, title)

    @staticmethod
    def find_chapter_by_title(tonie: CreativeTonie, title: str) -> Chapter | None:
        """Find the first chapter with exactly this title."""
        return tonie.find_chapter_by_title(title)

    @staticmethod
    def delete_chapter(tonie: CreativeTonie, chapter: Chapter) -> int:
        """
        Remove a chapter locally. Call commit() afterwards to persist.

        Returns:
            Number of chapters removed.
        """
        return tonie.delete_chapter(chapter)
