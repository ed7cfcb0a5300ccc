import pytest
from jss.codec import get_default_codec


@pytest.fixture(autouse=True)
def _clean_custom_plugins():  # pyright: ignore[reportUnusedFunction]
	codec = get_default_codec()
	codec.clear_custom()
	yield
	codec.clear_custom()
