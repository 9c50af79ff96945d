"""Shared fixtures for the sumbench tests."""

import pytest

from sumbench.core.data import random_array
from sumbench.errors import SumBenchError
from sumbench.native.loader import NativeSum
from sumbench.variants import build_variants

BIG_N = 10**7


@pytest.fixture(scope="session")
def big_array():
    return random_array(BIG_N, seed=20211116)


@pytest.fixture(scope="session")
def variants():
    vs = build_variants()
    yield vs
    vs.close()


@pytest.fixture
def native_sum():
    try:
        ns = NativeSum()
    except SumBenchError as e:
        pytest.skip(f"C variant unavailable: {e}")
    yield ns
    ns.close()


@pytest.fixture
def cc():
    from sumbench.native.toolchain import find_compiler
    from sumbench.errors import ToolchainUnavailable
    try:
        return find_compiler()
    except ToolchainUnavailable as e:
        pytest.skip(str(e))
