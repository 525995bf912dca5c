#!/usr/bin/env python3
"""
Print a bearer token for local use of the admin-gated endpoints.
Usage:
    python scripts/issue_token.py ops@example.com Admin
    python scripts/issue_token.py  # interactive mode
"""

import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.security import ADMIN_ROLE, create_backend_access_token


def issue_token(subject: str, role: str) -> str:
    return create_backend_access_token(subject, role=role)


def main():
    if len(sys.argv) >= 2:
        subject = sys.argv[1]
        role = sys.argv[2] if len(sys.argv) >= 3 else ADMIN_ROLE
    else:
        subject = input("Subject: ").strip()
        role = input(f"Role [{ADMIN_ROLE}]: ").strip() or ADMIN_ROLE
        if not subject:
            print("Error: subject required")
            sys.exit(1)
    print(issue_token(subject, role))


if __name__ == "__main__":
    main()
