"""Household and Creative-Tonie endpoints."""

from toniebox.api.endpoints import decode, decode_list
from toniebox.api.http_client import HttpClient
from toniebox.models.tonies import CreativeTonie, Household

HOUSEHOLDS = "/households"


def _creative_tonies_path(household_id: str) -> str:
    return f"{HOUSEHOLDS}/{household_id}/creativetonies"


def _creative_tonie_path(household_id: str, tonie_id: str) -> str:
    return f"{_creative_tonies_path(household_id)}/{tonie_id}"


def get_households(http: HttpClient) -> list[Household]:
    """Get all households the user belongs to."""
    return decode_list(HOUSEHOLDS, Household.from_dict, http.get_json(HOUSEHOLDS))


def get_creative_tonies(http: HttpClient, household_id: str) -> list[CreativeTonie]:
    """Get all Creative-Tonies of a household. Returned tonies are unbound."""
    path = _creative_tonies_path(household_id)
    return decode_list(path, CreativeTonie.from_dict, http.get_json(path))


def get_creative_tonie(http: HttpClient, household_id: str, tonie_id: str) -> CreativeTonie:
    """Get a single Creative-Tonie. The returned tonie is unbound."""
    path = _creative_tonie_path(household_id, tonie_id)
    return decode(path, CreativeTonie.from_dict, http.get_json(path))


def patch_creative_tonie(http: HttpClient, household_id: str, tonie: CreativeTonie) -> None:
    """
    Send the full wire representation of a Creative-Tonie.

    The response is not read back: the server may normalize fields, refresh to see them.
    """
    http.patch_json(_creative_tonie_path(household_id, tonie.id), tonie.to_dict())
