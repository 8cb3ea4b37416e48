"""
reset_data.py
-------------
Utility script to clear all stored data (users, vehicles) from the configured database.

This script is designed for development and testing purposes.
It drops every table and recreates an empty schema.

Usage:
    $ python reset_data.py

After running this script, you can repopulate sample data by executing:
    $ python seeds.py
"""

from car_rental import create_app
from car_rental.models.store import drop_db, init_db


def main():
    """Drop and recreate all tables of the configured database."""
    app = create_app()
    with app.app_context():
        drop_db()
        init_db()

    print("✅ Database has been successfully cleared.")
    print("💡 Tip: Run `python seeds.py` to regenerate demo data.")


if __name__ == "__main__":
    main()
