import pytest

import scalar_aad.config as config_mod


@pytest.fixture(autouse=True)
def restore_config():
    """Tests that call set_config() must not leak into each other."""
    saved = config_mod.get_config()
    yield
    config_mod._config = saved
