#!/usr/bin/env python3
"""
Create an approved admin account, or promote an existing member to admin.

Usage:
    uv run python src/scripts/create_admin.py --email admin@example.com --promote
    uv run python src/scripts/create_admin.py --email admin@example.com \
        --name "Jane Doe" --lot 58221.0137 --password s3cretpass
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core import config
from core.config import ROLE_ADMIN, STATUS_APPROVED
from core.database import get_connection, get_member_credentials, init_schema, update_member
from services.accounts import EmailAlreadyRegisteredError, register_member


def promote(conn, email: str) -> bool:
    """Make an existing member an approved admin."""
    found = get_member_credentials(conn, email.strip().lower())
    if found is None:
        print(f"ERROR: No member registered with {email}")
        return False
    member, _ = found
    update_member(conn, member["id"], role=ROLE_ADMIN, status=STATUS_APPROVED)
    print(f"Promoted {member['name']} ({member['email']}) to admin")
    return True


def create(conn, email: str, name: str, lot: str, password: str, phone: str) -> bool:
    """Register a new account and make it an approved admin."""
    try:
        member = register_member(conn, name, email, lot, password, password, phone=phone)
    except EmailAlreadyRegisteredError as e:
        print(f"ERROR: {e} Use --promote instead.")
        return False
    except ValueError as e:
        print("ERROR: Invalid admin details:")
        for line in str(e).split("\n"):
            print(f"  - {line}")
        return False
    update_member(conn, member["id"], role=ROLE_ADMIN, status=STATUS_APPROVED)
    print(f"Created admin {member['name']} ({member['email']})")
    return True


def main():
    parser = argparse.ArgumentParser(description="Create or promote an admin account")
    parser.add_argument("--email", required=True, help="Admin email address")
    parser.add_argument("--promote", action="store_true", help="Promote an existing member")
    parser.add_argument("--name", help="Full name (new accounts)")
    parser.add_argument("--lot", help="Lot number, e.g. 58221.0137 (new accounts)")
    parser.add_argument("--password", help="Password (new accounts)")
    parser.add_argument("--phone", default="", help="Phone number (new accounts)")
    args = parser.parse_args()

    config.DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection()
    try:
        init_schema(conn)
        if args.promote:
            ok = promote(conn, args.email)
        else:
            missing = [flag for flag in ("name", "lot", "password") if not getattr(args, flag)]
            if missing:
                parser.error(f"missing --{', --'.join(missing)} (or pass --promote)")
            ok = create(conn, args.email, args.name, args.lot, args.password, args.phone)
    finally:
        conn.close()

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
