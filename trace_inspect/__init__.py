"""
trace_inspect - classify Uniswap-family activity in transaction call traces.
"""

__version__ = "0.1.0"
