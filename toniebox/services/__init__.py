"""
Business logic services for the Tonie cloud.
"""

from toniebox.services.auth_service import AuthService
from toniebox.services.tonie_service import CreativeTonieService
from toniebox.services.upload_service import UploadService

__all__ = [
    "AuthService",
    "CreativeTonieService",
    "UploadService",
]
