"""User profile endpoint."""

from toniebox.api.endpoints import decode
from toniebox.api.http_client import HttpClient
from toniebox.models.auth import Me

ME = "/me"


def get_me(http: HttpClient) -> Me:
    """Get the profile of the authenticated user."""
    return decode(ME, Me.from_dict, http.get_json(ME))
