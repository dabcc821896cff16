#!/usr/bin/env python3
"""
Print a bcrypt hash for the administrator password.

Usage:
    python scripts/hash_admin_password.py
    # then set ADMIN_PASSWORD_HASH in the environment / .env
"""

import sys
import getpass
from pathlib import Path

# add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from storefront.core.security import get_password_hash


def main():
    password = getpass.getpass("Admin password: ")
    if not password:
        print("Empty password, nothing to hash", file=sys.stderr)
        return False
    if password != getpass.getpass("Repeat password: "):
        print("Passwords do not match", file=sys.stderr)
        return False
    print(get_password_hash(password))
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
