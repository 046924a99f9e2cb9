import pytest

from sharinggen import synthesize

DIRECTIONS = ["right", "left", "up", "down", "front"]


def pytest_addoption(parser):
    parser.addoption(
        "--exhaustive",
        action="store_true",
        help="Run value-grid sweeps over the largest trees",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "exhaustive: value-grid sweeps over the largest trees",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--exhaustive"):
        return
    skip = pytest.mark.skip(reason="need --exhaustive option to run")
    for item in items:
        if "exhaustive" in item.keywords:
            item.add_marker(skip)


# ---------------------------------------------------------------------------
# Shared trees
# ---------------------------------------------------------------------------


@pytest.fixture(params=[1, 2, 3, 4, 5])
def elements(request):
    """Neighbour labels for every supported small N."""
    return DIRECTIONS[: request.param]


@pytest.fixture
def tree(elements):
    return synthesize(elements)


@pytest.fixture(scope="session")
def von_neumann_tree():
    return synthesize(["right", "left", "up", "down"])
