"""
Command-line interface for the mbasic gateway.

Provides argument parsing and main execution flow.
"""

import argparse
import getpass
import sys

from avalon.config import DEFAULT_MAIL, DEFAULT_PASSWORD
from avalon.errors import AvalonError
from avalon.gateway import Gateway
from avalon.logging_setup import _setup_logging, log
from avalon.network import TransportConfig


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="avalon",
        description="Log in to the mbasic web interface and list account data.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Credentials can also be provided via the AVALON_MAIL and\n"
            "AVALON_PASSWORD env vars.  If the password is not supplied and not\n"
            "in the environment, you will be prompted for it."
        ),
    )
    parser.add_argument(
        "command", choices=("groups", "posts"),
        help="groups: list group memberships; posts: list posts on your profile",
    )
    parser.add_argument(
        "--mail", default=DEFAULT_MAIL,
        help="Account e-mail address (overrides AVALON_MAIL env var)",
    )
    parser.add_argument(
        "--password", default=DEFAULT_PASSWORD,
        help="Account password (overrides AVALON_PASSWORD env var)",
    )
    parser.add_argument(
        "--proxy", default=None,
        help="Forward proxy URL, e.g. http://127.0.0.1:8080",
    )
    parser.add_argument(
        "--client-cert", default=None,
        help="Client certificate file presented during the TLS handshake",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification (use behind an intercepting proxy)",
    )
    parser.add_argument(
        "--timeout", type=float, default=None,
        help="Per-request timeout in seconds (default: none)",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    return parser.parse_args(argv)


def build_transport(args: argparse.Namespace) -> TransportConfig:
    return TransportConfig(
        verify=args.verify_ssl,
        proxy=args.proxy,
        client_cert=args.client_cert,
        timeout=args.timeout,
        debug=args.debug,
    )


def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for the gateway CLI.
    """
    args = parse_args(argv)

    _setup_logging(debug=args.debug)

    if not args.mail:
        sys.exit("An account e-mail address is required (--mail or AVALON_MAIL).")
    if not args.password:
        args.password = getpass.getpass("Account password: ")

    with Gateway(args.mail, args.password, transport=build_transport(args)) as gateway:
        try:
            gateway.authenticate()
            if args.command == "groups":
                for group in gateway.fetch_groups():
                    print(f"{group.notifications:>4}  {group.name}  {group.url}")
            else:
                for post in gateway.list_own_posts():
                    print(post.data_ft)
        except AvalonError as exc:
            log.error("%s", exc)
            sys.exit(1)


if __name__ == "__main__":
    main()
