"""
Command-line entrypoint for the Porkbun client.

- Parses CLI args and config (env defaults)
- Initializes HttpClient and PorkbunAPI
- Runs one command and prints its result as JSON on stdout

API-level failures and schema errors exit with 2, HTTP errors with 1.
"""
from __future__ import annotations
import asyncio, json, sys
from dataclasses import asdict
from datetime import datetime
from typing import Any

from http_client import HttpClient, ServerError

from .api import PorkbunAPI
from .config import credentials_from_args, parse_args
from .errors import ApiStatusError, DecodeError, EncodeError
from .utils import API_DATE_LAYOUT

def _default(o: Any) -> Any:
    if isinstance(o, datetime):
        return o.strftime(API_DATE_LAYOUT)
    raise TypeError(f"{type(o).__name__} is not JSON serializable")

async def run(args) -> Any:
    credentials = credentials_from_args(args)
    async with HttpClient(
        base_url=args.base_url,
        connect_timeout=args.connect_timeout,
        read_timeout=args.read_timeout,
    ) as http:
        api = PorkbunAPI(http, credentials)
        if args.command == "ping":
            return {"yourIp": await api.ping()}
        if args.command == "domains":
            return [asdict(d) for d in await api.list_domains()]
        if args.command == "ns":
            return await api.get_name_servers(args.domain)
        if args.command == "records":
            return await api.retrieve_records(args.domain)
        return await api.retrieve_ssl_bundle(args.domain)

def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    try:
        result = asyncio.run(run(args))
    except (ApiStatusError, DecodeError, EncodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except ServerError as e:
        print(f"Server error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("Aborted.", file=sys.stderr)
        sys.exit(130)
    print(json.dumps(result, indent=2, default=_default))
