"""
Protocol Configuration Module

Contains the Uniswap-family contract addresses, ERC20 function selectors
and environment-driven settings used by the trace inspectors and CLI.
"""

import os

# RPC Configuration
DEFAULT_RPC_URL = "https://eth.llamarpc.com"


def get_rpc_url() -> str:
    """Get RPC URL from environment"""
    return os.getenv("WEB3_HTTP_URL", os.getenv("MAINNET_RPC_URL", DEFAULT_RPC_URL))


def is_debug_enabled() -> bool:
    """INSPECTOR_DEBUG=1 enables verbose inspector logging to file"""
    return os.getenv('INSPECTOR_DEBUG', '').lower() in ('1', 'true', 'yes')


# Uniswap V2 (lowercase)
UNISWAP_V2_ROUTER = "0x7a250d5630b4cf539739df2c5dacb4c659f2488d"
UNISWAP_V2_ROUTER_01 = "0xf164fc0ec4e93095b804a4795bbe1e041497b92a"
UNISWAP_V2_FACTORY = "0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f"

# Uniswap V3
UNISWAP_V3_ROUTER = "0xe592427a0aece92de3edee1f18e0157c05861564"
UNISWAP_V3_ROUTER_02 = "0x68b3465833fb72a70ecdf485e0e4c7bd8665fc45"
UNISWAP_V3_FACTORY = "0x1f98431c8ad98523631ae4a59f267346ea31f984"

# Sushiswap
SUSHISWAP_ROUTER = "0xd9e1ce17f2641f24ae83637ab66a2cca9c378b9f"
SUSHISWAP_FACTORY = "0xc0aee478e3658e2610c5f7a4a2e1777ce9e4f2ac"

# ERC20 function selectors
ERC20_SELECTORS = {
    "0xa9059cbb": "transfer",
    "0x23b872dd": "transferFrom",
}

# Trace types that carry a call action (create/suicide/reward are skipped)
CALL_TRACE_TYPES = {"call"}
