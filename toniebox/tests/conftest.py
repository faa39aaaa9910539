from collections.abc import Iterator
from unittest.mock import Mock

import pytest

from toniebox.api.http_client import HttpClient
from toniebox.config import TonieboxConfig
from toniebox.models.tonies import CreativeTonie, Household, TonieBinding
from toniebox.tests.utils.mock_transport import MockTransport
from toniebox.tests.utils.payloads import make_household, make_tonie


@pytest.fixture
def config() -> TonieboxConfig:
    return TonieboxConfig()


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def http(config: TonieboxConfig, mock_transport: MockTransport) -> Iterator[HttpClient]:
    with HttpClient(config, transport=mock_transport) as client:
        yield client


@pytest.fixture
def mock_http(config: TonieboxConfig) -> Mock:
    http = Mock(spec=HttpClient)
    http.config = config
    return http


@pytest.fixture
def household() -> Household:
    return Household.from_dict(make_household())


@pytest.fixture
def mock_executor() -> Mock:
    return Mock()


@pytest.fixture
def bound_tonie(household: Household, mock_executor: Mock) -> CreativeTonie:
    binding = TonieBinding(household=household, executor=mock_executor)
    return CreativeTonie.from_dict(make_tonie(), binding=binding)
