"""
Global test configuration and fixtures
"""

import time

import pytest

SLOW_TEST_THRESHOLD = 5.0
WARNING_TEST_THRESHOLD = 2.0


@pytest.fixture(autouse=True)
def track_test_duration(request):
    """Track every test's duration and warn about slow ones"""
    start_time = time.time()

    yield

    duration = time.time() - start_time
    test_name = request.node.nodeid

    if duration > SLOW_TEST_THRESHOLD:
        print(f"\n⚠️  SLOW TEST ({duration:.2f}s): {test_name}")
        print("   Consider marking with @pytest.mark.slow or optimizing")
    elif duration > WARNING_TEST_THRESHOLD:
        print(f"\n⏱️  Slow ({duration:.2f}s): {test_name}")


@pytest.fixture(scope="session")
def go_parser():
    """Real tree-sitter backed Go parser"""
    from codegraph_fragments.parsing import GoParser

    return GoParser()


@pytest.fixture(scope="session")
def fragment_parser(go_parser):
    """Fragment parser on top of the real Go grammar"""
    from codegraph_fragments.fragment import FragmentParser

    return FragmentParser(go_parser)


# Pytest hooks
def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Tests that drive the real tree-sitter grammar")
    config.addinivalue_line("markers", "slow: Slow tests (>5s)")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location"""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
