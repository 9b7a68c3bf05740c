"""Migration / setup helper
This script creates the users, vehicles, trips and request_logs tables.
Run: python migrate.py
"""
from config import DATABASE_URL, configure_logging
from db import init_db


def main():
    configure_logging()
    init_db()
    print(f"Database initialized ({DATABASE_URL})")


if __name__ == "__main__":
    main()
