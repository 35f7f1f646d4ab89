"""
Trace Inspector - classify the Uniswap activity of one transaction

Usage:
    trace-inspect <tx_hash>
    trace-inspect <tx_hash> --rpc-url http://localhost:8545
    trace-inspect <tx_hash> --output actions.csv   # Export classified actions to CSV
    trace-inspect <tx_hash> --keep-pruned          # Keep pruned actions in the output
    trace-inspect <tx_hash> --verbose              # Debug logging to inspector_debug.log

The RPC node must support trace_transaction (Erigon, Nethermind, Reth, ...).
Set WEB3_HTTP_URL (or MAINNET_RPC_URL) in the environment or a .env file.
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

import pandas as pd
from dotenv import load_dotenv
from web3 import Web3

from .config.protocol_config import get_rpc_url
from .logging_config import setup_logging, DEBUG_LOG_PATH
from .services.inspectors import BatchInspector, Inspection

logger = logging.getLogger(__name__)


def print_section(title: str, char: str = "="):
    """Print a section header"""
    print(f"\n{char * 60}")
    print(f" {title}")
    print(f"{char * 60}")


def is_valid_tx_hash(tx_hash: str) -> bool:
    if not tx_hash.startswith("0x") or len(tx_hash) != 66:
        return False
    try:
        int(tx_hash, 16)
    except ValueError:
        return False
    return True


def fetch_traces(w3: Web3, tx_hash: str) -> List[Dict]:
    """
    Fetch Parity-style traces for a transaction.

    Raises:
        RuntimeError: If the node returns an error or no traces
    """
    response = w3.provider.make_request("trace_transaction", [tx_hash])
    if response.get('error'):
        raise RuntimeError(f"trace_transaction failed: {response['error']}")
    traces = response.get('result') or []
    if not traces:
        raise RuntimeError(f"No traces returned for {tx_hash}")
    return [dict(t) for t in traces]


def print_inspection(inspection: Inspection):
    print_section(f"TRANSACTION: {inspection.hash[:16]}...")
    print(f"\nBlock:      {inspection.block_number}")
    print(f"From:       {inspection.from_address}")
    print(f"Contract:   {inspection.contract}")
    print(f"Status:     {inspection.status.value}")
    protocols = sorted(p.value for p in inspection.protocols)
    print(f"Protocols:  {', '.join(protocols) if protocols else 'none'}")

    print_section(f"ACTIONS ({len(inspection.actions)})", "-")
    for record in inspection.to_records():
        trace = record['trace_address'] or 'root'
        if record['details'] is not None:
            print(f"  [{record['index']}] {record['action']:<14} {record['details']}")
        elif record['kind'] == 'unknown':
            print(f"  [{record['index']}] {'call':<14} {trace} {record['to']} {record['selector'] or ''}")
        else:
            print(f"  [{record['index']}] {record['action']:<14} {trace}")


def export_csv(inspection: Inspection, output: str):
    df = pd.DataFrame(inspection.to_records())
    df.insert(0, 'tx_hash', inspection.hash)
    df.insert(1, 'status', inspection.status.value)
    df.to_csv(output, index=False)
    print(f"\n[+] Exported {len(df)} actions to {output}")


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Classify Uniswap activity in a transaction trace")
    parser.add_argument("tx_hash", help="Transaction hash (0x + 64 hex chars)")
    parser.add_argument("--rpc-url", default=None, help="RPC URL (defaults to WEB3_HTTP_URL)")
    parser.add_argument("--output", "-o", default=None, help="Export actions to this CSV file")
    parser.add_argument("--keep-pruned", action="store_true", help="Keep pruned actions in the output")
    parser.add_argument("--verbose", "-v", action="store_true", help="Write debug logs to inspector_debug.log")
    args = parser.parse_args(argv)

    setup_logging(debug=args.verbose)

    tx_hash = args.tx_hash.lower()
    if not is_valid_tx_hash(tx_hash):
        print(f"[!] Invalid transaction hash: {args.tx_hash}")
        print("    Expected format: 0x followed by 64 hex characters")
        return 1

    rpc_url = args.rpc_url or get_rpc_url()
    w3 = Web3(Web3.HTTPProvider(rpc_url))

    try:
        traces = fetch_traces(w3, tx_hash)
    except Exception as e:
        print(f"[!] Failed to fetch traces from {rpc_url}: {e}")
        return 1

    try:
        inspection = BatchInspector().inspect_traces(traces, prune=not args.keep_pruned)
    except ValueError as e:
        print(f"[!] Could not inspect {tx_hash}: {e}")
        return 1

    print_inspection(inspection)

    if args.output:
        export_csv(inspection, args.output)

    if args.verbose:
        print(f"\nDetailed inspection trace written to: {DEBUG_LOG_PATH}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
