"""
ABI definitions for the trace inspectors.

The JSON files in this directory ship with the package and are loaded once
when an inspector is constructed. An ABI that cannot be read or parsed is
fatal: the inspectors cannot classify anything without it.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

ABI_DIR = Path(__file__).parent

UNISWAP_ROUTER = "uniswap_router"
UNISWAP_PAIR = "uniswap_pair"
ERC20 = "erc20"


def validate_abi(name: str, abi, required_functions: Optional[List[str]] = None) -> list:
    """
    Check that an ABI is a list of entries and defines the functions we decode.

    Args:
        name: ABI name, used in error messages
        abi: Parsed ABI
        required_functions: Function names that must be present

    Returns:
        The ABI, unchanged

    Raises:
        ValueError: If the ABI is malformed or a required function is missing
    """
    if not isinstance(abi, list):
        raise ValueError(f"{name} ABI must be a list of entries, got {type(abi).__name__}")

    functions = set()
    for entry in abi:
        if not isinstance(entry, dict) or 'type' not in entry:
            raise ValueError(f"Invalid entry in {name} ABI: {entry}")
        if entry['type'] == 'function':
            if 'name' not in entry or not isinstance(entry.get('inputs', []), list):
                raise ValueError(f"Invalid function entry in {name} ABI: {entry}")
            functions.add(entry['name'])

    missing = [fn for fn in (required_functions or []) if fn not in functions]
    if missing:
        raise ValueError(f"{name} ABI is missing functions: {missing}")
    return abi


def load_abi(name: str, required_functions: Optional[List[str]] = None) -> list:
    """
    Load a bundled ABI by name.

    Args:
        name: File stem under the abis directory (e.g. 'uniswap_pair')
        required_functions: Function names that must be present

    Returns:
        ABI list

    Raises:
        ValueError: If the file cannot be read or parsed
    """
    path = ABI_DIR / f"{name}.json"
    try:
        with open(path, encoding='utf-8') as f:
            abi = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"could not parse {name} abi: {e}") from e

    logger.debug(f"Loaded {name} ABI ({len(abi) if isinstance(abi, list) else 0} entries)")
    return validate_abi(name, abi, required_functions)


__all__ = [
    'load_abi',
    'validate_abi',
    'UNISWAP_ROUTER',
    'UNISWAP_PAIR',
    'ERC20',
]
