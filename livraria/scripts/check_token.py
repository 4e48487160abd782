"""
Validate a bearer token against the configured secret, issuer and audience. Run from project root:
  python -m livraria.scripts.check_token TOKEN
  python -m livraria.scripts.check_token --no-verify TOKEN   # inspect only, no secret needed
"""
import argparse
import json
import logging
import sys

from livraria.core.config import get_settings
from livraria.core.errors import ConfigurationMissing, TokenError
from livraria.core.logging import configure_logging
from livraria.core.tokens import decode_unverified, unverified_header, validate_token

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check a Livraria bearer token.")
    parser.add_argument("token", help="Compact JWT (header.payload.signature)")
    parser.add_argument(
        "--no-verify",
        action="store_true",
        help="Print header and payload without verifying the signature or claims",
    )
    args = parser.parse_args(argv)

    if args.no_verify:
        try:
            header = unverified_header(args.token)
            payload = decode_unverified(args.token)
        except TokenError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(json.dumps({"header": header, "payload": payload}, indent=2, default=str))
        return 0

    try:
        settings = get_settings()
    except ConfigurationMissing as e:
        print(e.message, file=sys.stderr)
        return 2
    configure_logging(settings.LOG_LEVEL)

    try:
        identity = validate_token(args.token, settings.token_config())
    except TokenError as e:
        logger.warning("Token rejected: kind=%s", e.kind)
        print(f"invalid ({e.kind}): {e.message}", file=sys.stderr)
        return 1
    print(identity.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
