"""
Authentication-related domain models.
"""

from dataclasses import dataclass
from typing import Any, Self


@dataclass(frozen=True, kw_only=True)
class JWTToken:
    """
    Token returned by the identity provider on login.

    Attributes:
        access_token: Bearer token for API requests.
        expires_in: Lifetime of the access token in seconds.
        refresh_token: Refresh token (never used by this library).
        token_type: Token type, usually "Bearer".
        scope: Granted scopes.
    """

    access_token: str
    expires_in: int = 0
    refresh_token: str = ""
    token_type: str = ""
    scope: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            access_token=data["access_token"],
            expires_in=data.get("expires_in") or 0,
            refresh_token=data.get("refresh_token") or "",
            token_type=data.get("token_type") or "",
            scope=data.get("scope") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire representation; empty optional fields are omitted."""
        result: dict[str, Any] = {"access_token": self.access_token}
        if self.expires_in:
            result["expires_in"] = self.expires_in
        if self.refresh_token:
            result["refresh_token"] = self.refresh_token
        if self.token_type:
            result["token_type"] = self.token_type
        if self.scope:
            result["scope"] = self.scope
        return result


@dataclass(frozen=True, kw_only=True)
class Me:
    """Profile of the authenticated user."""

    email: str = ""
    uuid: str = ""
    first_name: str = ""
    last_name: str = ""
    sex: str = ""
    accepted_terms_of_use: bool = False
    tracking: bool = False
    auth_code: str = ""
    profile_image: str = ""
    is_verified: bool = False
    is_edu_user: bool = False
    notification_count: int = 0
    requires_verification_to_upload: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            email=data.get("email") or "",
            uuid=data.get("uuid") or "",
            first_name=data.get("firstName") or "",
            last_name=data.get("lastName") or "",
            sex=data.get("sex") or "",
            accepted_terms_of_use=bool(data.get("acceptedTermsOfUse")),
            tracking=bool(data.get("tracking")),
            auth_code=data.get("authCode") or "",
            profile_image=data.get("profileImage") or "",
            is_verified=bool(data.get("isVerified")),
            is_edu_user=bool(data.get("isEduUser")),
            notification_count=data.get("notificationCount") or 0,
            requires_verification_to_upload=bool(data.get("requiresVerificationToUpload")),
        )
