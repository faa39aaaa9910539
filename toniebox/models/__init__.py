"""
Domain models for the Tonie cloud.

Entities are plain dataclasses with from_dict()/to_dict() wire mapping.
"""

from toniebox.models.auth import JWTToken, Me
from toniebox.models.tonies import (
    Chapter,
    CreativeTonie,
    Household,
    TonieBinding,
    TonieExecutor,
    UploadFields,
    UploadTicket,
)

__all__ = [
    # Auth
    "JWTToken",
    "Me",
    # Tonies
    "Household",
    "CreativeTonie",
    "Chapter",
    "TonieBinding",
    "TonieExecutor",
    # Upload
    "UploadFields",
    "UploadTicket",
]
