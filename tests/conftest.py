import pytest

from fenwicktrace import config as fw_config
from fenwicktrace.algo.kernels import select_kernels


@pytest.fixture(autouse=True)
def _fresh_runtime_config():
    fw_config.reset_runtime_config_cache()
    yield
    fw_config.reset_runtime_config_cache()


@pytest.fixture(params=["python", "numba"])
def kernels(request):
    return select_kernels(request.param)
