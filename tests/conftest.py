import pytest

from handbuilders import make_hand


@pytest.fixture
def upright_hand():
    return make_hand(-90.0)
