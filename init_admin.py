"""
Create the initial OWNER account and default payroll settings

Usage:
    INITIAL_OWNER_PASSWORD=... python init_admin.py [--emp-code OWN-001] [--name "Owner"]
"""
import argparse
import getpass
import os

from attendance_payroll.core.logging import setup_logging
from attendance_payroll.db.init_db import init_db
from attendance_payroll.db.session import SessionLocal


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--emp-code", default="OWN-001")
    parser.add_argument("--name", default="Owner")
    args = parser.parse_args()

    password = os.environ.get("INITIAL_OWNER_PASSWORD") or getpass.getpass("Owner password: ")

    setup_logging()
    db = SessionLocal()
    try:
        owner = init_db(db, password=password, emp_code=args.emp_code, name=args.name)
        if owner:
            print(f"Owner created. Employee Code: {owner.emp_code}")
        else:
            print("Owner already exists, nothing to do")
    finally:
        db.close()


if __name__ == "__main__":
    main()
