import os
import sys

import pytest

# Project root for the package, tests dir for the shared builders
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from trace_inspect.services.inspectors import ERC20Inspector, UniswapInspector


@pytest.fixture(scope="session")
def uniswap():
    return UniswapInspector()


@pytest.fixture(scope="session")
def erc20():
    return ERC20Inspector()
