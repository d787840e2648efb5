import pytest

from tests.fakes import NEW_REGIME_RESULT


@pytest.fixture
def new_regime_result():
    return dict(NEW_REGIME_RESULT)
