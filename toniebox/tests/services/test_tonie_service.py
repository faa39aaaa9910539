from unittest.mock import Mock, patch

import pytest

from toniebox.exceptions import APIError, TonieNotBoundError
from toniebox.models.tonies import Chapter, CreativeTonie, Household
from toniebox.services.tonie_service import CreativeTonieService
from toniebox.tests.utils.payloads import HOUSEHOLD_ID, TONIE_ID, make_chapter, make_tonie


@pytest.fixture
def mock_upload_service() -> Mock:
    return Mock()


@pytest.fixture
def service(mock_http: Mock, mock_upload_service: Mock) -> CreativeTonieService:
    return CreativeTonieService(mock_http, mock_upload_service)


def test_list_binds_tonies_to_household_and_service(
    service: CreativeTonieService, household: Household, mock_http: Mock
) -> None:
    with patch("toniebox.services.tonie_service.get_creative_tonies") as mock_list:
        mock_list.return_value = [
            CreativeTonie.from_dict(make_tonie()),
            CreativeTonie.from_dict(make_tonie("other")),
        ]

        tonies = service.list_creative_tonies(household)

    mock_list.assert_called_once_with(mock_http, HOUSEHOLD_ID)
    for tonie in tonies:
        assert tonie.household is household
        assert tonie.binding.executor is service
        assert not tonie.is_dirty


def test_get_creative_tonie_binds_tonie(
    service: CreativeTonieService, household: Household, mock_http: Mock
) -> None:
    with patch("toniebox.services.tonie_service.get_creative_tonie") as mock_get:
        mock_get.return_value = CreativeTonie.from_dict(make_tonie())

        tonie = service.get_creative_tonie(household, TONIE_ID)

    mock_get.assert_called_once_with(mock_http, HOUSEHOLD_ID, TONIE_ID)
    assert tonie.binding.executor is service


def test_refresh_updates_instance_in_place(
    service: CreativeTonieService, household: Household
) -> None:
    with patch("toniebox.services.tonie_service.get_creative_tonies") as mock_list:
        mock_list.return_value = [CreativeTonie.from_dict(make_tonie())]
        tonie = service.list_creative_tonies(household)[0]
    binding = tonie.binding
    tonie.name = "local rename"

    server_state = make_tonie(
        name="Server Name", chapters=[make_chapter("ch-9", "Transcoded", seconds=30.0)]
    )
    server_state["transcoding"] = True
    server_state["transcodingErrors"] = ["unsupported codec"]
    with patch("toniebox.services.tonie_service.get_creative_tonie") as mock_get:
        mock_get.return_value = CreativeTonie.from_dict(server_state)

        service.refresh(tonie)

    assert tonie.name == "Server Name"
    assert tonie.transcoding is True
    assert tonie.transcoding_errors == ["unsupported codec"]
    assert [c.id for c in tonie.chapters] == ["ch-9"]
    assert tonie.binding is binding
    assert not tonie.is_dirty


def test_listed_then_refreshed_equals_single_fetch(
    service: CreativeTonieService, household: Household
) -> None:
    with patch("toniebox.services.tonie_service.get_creative_tonies") as mock_list:
        mock_list.return_value = [CreativeTonie.from_dict(make_tonie(name="Listed"))]
        listed = service.list_creative_tonies(household)[0]

    with patch("toniebox.services.tonie_service.get_creative_tonie") as mock_get:
        mock_get.side_effect = lambda *_: CreativeTonie.from_dict(make_tonie(name="Current"))
        service.refresh(listed)
        direct = service.get_creative_tonie(household, TONIE_ID)

    assert listed == direct
    assert listed.to_dict() == direct.to_dict()


def test_commit_sends_dirty_tonie_and_clears_flag(
    service: CreativeTonieService, bound_tonie: CreativeTonie, mock_http: Mock
) -> None:
    bound_tonie.name = "Renamed"

    with patch("toniebox.services.tonie_service.patch_creative_tonie") as mock_patch:
        sent = service.commit(bound_tonie)

    mock_patch.assert_called_once_with(mock_http, HOUSEHOLD_ID, bound_tonie)
    assert sent is True
    assert not bound_tonie.is_dirty


def test_commit_sends_tonie_after_in_place_chapter_reorder(
    service: CreativeTonieService, bound_tonie: CreativeTonie
) -> None:
    bound_tonie.chapters.sort(key=lambda c: c.title, reverse=True)

    with patch("toniebox.services.tonie_service.patch_creative_tonie") as mock_patch:
        sent = service.commit(bound_tonie)

    mock_patch.assert_called_once()
    assert sent is True
    assert not bound_tonie.is_dirty


def test_commit_skips_clean_tonie(
    service: CreativeTonieService, bound_tonie: CreativeTonie
) -> None:
    with patch("toniebox.services.tonie_service.patch_creative_tonie") as mock_patch:
        sent = service.commit(bound_tonie)

    mock_patch.assert_not_called()
    assert sent is False


def test_commit_with_force_sends_clean_tonie(
    service: CreativeTonieService, bound_tonie: CreativeTonie
) -> None:
    with patch("toniebox.services.tonie_service.patch_creative_tonie") as mock_patch:
        sent = service.commit(bound_tonie, force=True)

    mock_patch.assert_called_once()
    assert sent is True


def test_failed_commit_keeps_local_change(
    service: CreativeTonieService, bound_tonie: CreativeTonie
) -> None:
    bound_tonie.name = "Renamed"

    with patch("toniebox.services.tonie_service.patch_creative_tonie") as mock_patch:
        mock_patch.side_effect = APIError("request failed", status_code=500, body="oops")

        with pytest.raises(APIError):
            service.commit(bound_tonie)

    assert bound_tonie.name == "Renamed"
    assert bound_tonie.is_dirty


def test_upload_delegates_to_upload_service(
    service: CreativeTonieService, bound_tonie: CreativeTonie, mock_upload_service: Mock
) -> None:
    mock_upload_service.upload_chapter.return_value = Chapter(id="k1", file="f1", title="T")

    chapter = service.upload_file(bound_tonie, "story.mp3", "T")

    mock_upload_service.upload_chapter.assert_called_once_with(bound_tonie, "story.mp3", "T")
    assert chapter.id == "k1"


def test_operations_on_unbound_tonie_raise(
    service: CreativeTonieService, mock_upload_service: Mock
) -> None:
    tonie = CreativeTonie.from_dict(make_tonie())

    with pytest.raises(TonieNotBoundError):
        service.refresh(tonie)
    with pytest.raises(TonieNotBoundError):
        service.commit(tonie, force=True)
    with pytest.raises(TonieNotBoundError):
        service.upload_file(tonie, "story.mp3", "T")
    mock_upload_service.upload_chapter.assert_not_called()
