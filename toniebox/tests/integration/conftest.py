import os

import pytest


def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    missing = not (os.getenv("TONIEBOX_USERNAME") and os.getenv("TONIEBOX_PASSWORD"))
    if not missing:
        return
    mark_expr = getattr(config.option, "markexpr", "")
    if "integration" in mark_expr:
        return
    skip = pytest.mark.skip(reason="TONIEBOX_USERNAME / TONIEBOX_PASSWORD not set")
    for item in items:
        if item.get_closest_marker("integration"):
            item.add_marker(skip)


@pytest.fixture(scope="session")
def toniebox_credentials() -> tuple[str, str]:
    username = os.getenv("TONIEBOX_USERNAME")
    password = os.getenv("TONIEBOX_PASSWORD")
    if not username or not password:
        pytest.fail("TONIEBOX_USERNAME and TONIEBOX_PASSWORD must be set to run integration tests.")
    return username, password
