from __future__ import annotations
import argparse, os

from .models import Credentials

DEFAULT_BASE_URL = "https://api.porkbun.com/api/json/v3"

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="porkbun-dns", description="Porkbun domain/DNS API client")
    p.add_argument("--base-url", default=os.getenv("PORKBUN_BASE_URL", DEFAULT_BASE_URL))
    p.add_argument("--api-key", default=os.getenv("PORKBUN_API_KEY", ""))
    p.add_argument("--secret-api-key", default=os.getenv("PORKBUN_SECRET_API_KEY", ""))
    p.add_argument("--connect-timeout", type=float, default=float(os.getenv("CONNECT_TIMEOUT", "5")))
    p.add_argument("--read-timeout", type=float, default=float(os.getenv("READ_TIMEOUT", "30")))

    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("ping", help="verify credentials and show your public IP")
    sub.add_parser("domains", help="list all domains in the account")
    for name, help_text in (
        ("ns", "show authoritative nameservers"),
        ("records", "list DNS records"),
        ("ssl", "retrieve the SSL certificate bundle"),
    ):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("domain")
    return p

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)

def credentials_from_args(args: argparse.Namespace) -> Credentials:
    if not args.api_key or not args.secret_api_key:
        raise SystemExit("PORKBUN_API_KEY and PORKBUN_SECRET_API_KEY (or --api-key/--secret-api-key) are required")
    return Credentials(api_key=args.api_key, secret_api_key=args.secret_api_key)
