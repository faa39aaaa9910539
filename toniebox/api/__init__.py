"""
Tonie cloud API client layer.

Provides synchronous HTTP communication with the Tonie cloud API.
"""

from toniebox.api.http_client import HttpClient, sanitize_for_log

__all__ = ["HttpClient", "sanitize_for_log"]
