"""
Create the credential fields for a new account (e.g. the first admin) and print
them as JSON for the storage layer to insert. Run from project root:
  python -m livraria.scripts.create_credential DISPLAY_NAME EMAIL PASSWORD [role]
Example:
  python -m livraria.scripts.create_credential admin admin@example.com your-secure-password admin
"""
import argparse
import base64
import json
import sys

from pydantic import ValidationError

from livraria.schemas.auth import RegistrationRequest, Role
from livraria.services.accounts import register_account


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Livraria account credential (no registration UI).")
    parser.add_argument("display_name", help="Display name (3-50 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role])
    args = parser.parse_args(argv)

    try:
        request = RegistrationRequest(
            display_name=args.display_name.strip(),
            email=args.email.strip(),
            password=args.password,
        )
    except ValidationError as e:
        for error in e.errors(include_url=False, include_input=False):
            field = ".".join(str(part) for part in error["loc"])
            print(f"Invalid {field}: {error['msg']}", file=sys.stderr)
        return 1

    account = register_account(request, role=Role(args.role))
    print(
        json.dumps(
            {
                "display_name": account.display_name,
                "email": account.email,
                "role": account.role.value,
                "is_active": account.is_active,
                "created_at": account.created_at.isoformat(),
                "password_hash": base64.b64encode(account.password_hash).decode("ascii"),
                "password_salt": base64.b64encode(account.password_salt).decode("ascii"),
            },
            indent=2,
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
