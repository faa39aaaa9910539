"""
Creative-Tonie service.

Lists, refreshes and commits Creative-Tonies. Tonies handed out by this
service are bound to it, so their own refresh()/commit()/upload_file()
route back here.
"""

from pathlib import Path

import structlog

from toniebox.api.endpoints.households import (
    get_creative_tonie,
    get_creative_tonies,
    patch_creative_tonie,
)
from toniebox.api.http_client import HttpClient
from toniebox.exceptions import TonieNotBoundError
from toniebox.models.tonies import Chapter, CreativeTonie, Household, TonieBinding
from toniebox.services.upload_service import UploadService

logger = structlog.get_logger(__name__)


class CreativeTonieService:
    """Network operations on Creative-Tonies."""

    def __init__(self, http: HttpClient, upload_service: UploadService | None = None) -> None:
        """
        Args:
            http: HTTP client.
            upload_service: Service running chapter uploads.
        """
        self._http = http
        self._upload_service = upload_service or UploadService(http)

    def list_creative_tonies(self, household: Household) -> list[CreativeTonie]:
        """
        List the Creative-Tonies of a household.

        Args:
            household: Household from get_households().

        Returns:
            Tonies bound to the household and to this service.
        """
        tonies = get_creative_tonies(self._http, household.id)
        for tonie in tonies:
            self._bind(tonie, household)
        logger.debug("Creative-Tonies listed", household_id=household.id, count=len(tonies))
        return tonies

    def get_creative_tonie(self, household: Household, tonie_id: str) -> CreativeTonie:
        """Fetch a single Creative-Tonie, bound like the listed ones."""
        tonie = get_creative_tonie(self._http, household.id, tonie_id)
        self._bind(tonie, household)
        return tonie

    def refresh(self, tonie: CreativeTonie) -> None:
        """
        Overwrite the tonie's fields in place with the server state.

        Identity and binding of the instance are kept. Local changes not yet
        committed are lost.
        """
        household = self._household_of(tonie)
        fresh = get_creative_tonie(self._http, household.id, tonie.id)
        tonie.update_from(fresh)
        logger.debug("Creative-Tonie refreshed", tonie_id=tonie.id)

    def commit(self, tonie: CreativeTonie, *, force: bool = False) -> bool:
        """
        PATCH the tonie's current state to the server.

        A tonie without local changes is not sent unless ``force`` is set.
        On failure the local changes are kept and the tonie stays dirty;
        refresh() to resynchronize.

        Returns:
            True if the tonie was sent.
        """
        household = self._household_of(tonie)
        if not (tonie.is_dirty or force):
            logger.debug("No local changes, skipping commit", tonie_id=tonie.id)
            return False

        patch_creative_tonie(self._http, household.id, tonie)
        tonie.mark_clean()
        logger.info("Creative-Tonie committed", tonie_id=tonie.id, chapters=len(tonie.chapters))
        return True

    def upload_file(self, tonie: CreativeTonie, path: str | Path, title: str) -> Chapter:
        """Upload an audio file as a new chapter. See UploadService.upload_chapter()."""
        self._household_of(tonie)
        return self._upload_service.upload_chapter(tonie, path, title)

    def _bind(self, tonie: CreativeTonie, household: Household) -> None:
        tonie.binding = TonieBinding(household=household, executor=self)

    @staticmethod
    def _household_of(tonie: CreativeTonie) -> Household:
        household = tonie.household
        if household is None:
            raise TonieNotBoundError()
        return household
