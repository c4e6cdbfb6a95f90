#!/usr/bin/env python3
"""
Manual test client for the spendings endpoints.

    python helpers/spending_client.py list
    python helpers/spending_client.py add --amount -100 --date 2025-08-08 --description "Test spending"
"""
import argparse
import json
import os
import sys

import httpx

API_URL = os.environ.get("AA_API_URL", "http://127.0.0.1:8787")
DB = os.environ.get("AA_DB", "accounting-0")


def api_call(client: httpx.Client, method: str, endpoint: str, db: str, data=None):
    resp = client.request(method, endpoint, params={"db": db}, json=data)
    if resp.is_error:
        print(f"Request failed: {resp.status_code} {resp.text}", file=sys.stderr)
        sys.exit(1)
    return resp.json()


def cmd_list(client, args):
    result = api_call(client, "GET", "/spendings", args.db)
    print("Spendings fetched successfully:")
    print(json.dumps(result, indent=2))


def cmd_add(client, args):
    spending = {
        "amount": args.amount,
        "currency": args.currency,
        "dateOfSpending": args.date,
        "description": args.description,
    }
    if args.category is not None:
        spending["categoryId"] = args.category
    result = api_call(client, "POST", "/spendings", args.db, spending)
    print("Spending added successfully:")
    print(json.dumps(result, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Accounting API spendings client")
    parser.add_argument("--api-url", default=API_URL)
    parser.add_argument("--db", default=DB)
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="Fetch all spendings")
    p_list.set_defaults(func=cmd_list)

    p_add = sub.add_parser("add", help="Add a spending")
    p_add.add_argument("--amount", type=float, required=True)
    p_add.add_argument("--currency", default="USD")
    p_add.add_argument("--date", required=True, help="YYYY-MM-DD")
    p_add.add_argument("--description", default="")
    p_add.add_argument("--category", type=int)
    p_add.set_defaults(func=cmd_add)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    with httpx.Client(base_url=args.api_url, timeout=30) as client:
        args.func(client, args)


if __name__ == "__main__":
    main()
