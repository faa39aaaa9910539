"""
Toniebox client configuration.
"""

from dataclasses import dataclass

import httpx

_PROXY_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True, kw_only=True)
class TonieboxConfig:
    """
    Attributes:
        token_url: OpenID Connect token endpoint used for login.
        api_url: Base URL for the Tonie cloud API.
        upload_url: Object storage endpoint receiving chapter uploads.
        client_id: OAuth client id sent with the password grant.
        scope: OAuth scope sent with the password grant.
        grant_type: OAuth grant type.
        timeout: Timeout in seconds, applied separately to connecting, reading,
            writing and acquiring a pooled connection (httpx semantics). It is
            not a cap on the total duration of a request.
        user_agent: User-Agent header value.
        proxy: Optional proxy URL (e.g. "http://proxy.example.com:8080").
    """

    token_url: str = "https://login.tonies.com/auth/realms/tonies/protocol/openid-connect/token"
    api_url: str = "https://api.tonie.cloud/v2"
    upload_url: str = "https://bxn-toniecloud-prod-upload.s3.amazonaws.com/"
    client_id: str = "my-tonies"
    scope: str = "openid"
    grant_type: str = "password"
    timeout: float = 30.0
    user_agent: str = "Toniebox-Python/0.1"
    proxy: str | None = None

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if self.proxy is not None:
            _validate_proxy(self.proxy)


def _validate_proxy(proxy: str) -> None:
    try:
        url = httpx.URL(proxy)
    except (httpx.InvalidURL, TypeError) as e:
        msg = f"invalid proxy URL: {proxy!r}"
        raise ValueError(msg) from e

    if url.scheme not in _PROXY_SCHEMES or not url.host:
        msg = f"invalid proxy URL: {proxy!r}"
        raise ValueError(msg)
