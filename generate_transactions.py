#!/usr/bin/env python3
"""
Generate a random but well-formed transaction feed for load runs.

    python generate_transactions.py --rows 1000000 transactions.csv
"""

import argparse
import csv
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from core_payments.amount import Amount

TX_WEIGHTS = {
    'deposit': 0.45,
    'withdrawal': 0.40,
    'dispute': 0.08,
    'resolve': 0.04,
    'chargeback': 0.03
}


def generate_transactions(writer, num_records: int, num_clients: int, rng: random.Random) -> int:
    """Write up to num_records rows, returns the number written"""
    writer.writerow(['type', 'client', 'tx', 'amount'])
    deposits_by_client = {}  # deposit tx ids that disputes may reference
    tx_id = 1
    written = 0
    
    for _ in range(num_records):
        client_id = rng.randint(1, num_clients)
        tx_type = rng.choices(list(TX_WEIGHTS), weights=list(TX_WEIGHTS.values()))[0]
        
        if tx_type in ('deposit', 'withdrawal'):
            amount = Amount(rng.randint(1, 100_000_000))
            writer.writerow([tx_type, client_id, tx_id, amount.to_string()])
            if tx_type == 'deposit':
                deposits_by_client.setdefault(client_id, []).append(tx_id)
            tx_id += 1
        elif deposits_by_client.get(client_id):
            referenced = rng.choice(deposits_by_client[client_id])
            writer.writerow([tx_type, client_id, referenced, ''])
        else:
            continue
        written += 1
    
    return written


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate a random transaction feed")
    parser.add_argument("output", nargs="?", default="transactions.csv")
    parser.add_argument("--rows", type=int, default=1_000_000)
    parser.add_argument("--clients", type=int, default=1_000)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    
    rng = random.Random(args.seed)
    with open(args.output, 'w', newline='') as file:
        written = generate_transactions(csv.writer(file), args.rows, args.clients, rng)
    print(f"wrote {written} transactions to {args.output}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
