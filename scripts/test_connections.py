#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify the document store, the auth database and the AI API.
Usage: python scripts/test_connections.py   (after `pip install -e .`)
"""
from sqlalchemy.engine import make_url

from career_portal.core.config import get_settings
from career_portal.db.mongodb import test_mongo_connection
from career_portal.db.postgres import test_postgres_connection
from career_portal.services.ai_client import get_ai_client


def main():
    settings = get_settings()
    print("=" * 50)
    print("CAREER PORTAL - CONNECTION TEST")
    print("=" * 50)

    print("\n[1] Testing auth database...")
    print(f"    URL: {make_url(settings.auth_database_url).render_as_string(hide_password=True)}")
    if test_postgres_connection():
        print("    ✅ Auth DB: CONNECTED")
    else:
        print("    ❌ Auth DB: FAILED")

    print("\n[2] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    ✅ MongoDB: CONNECTED")
    else:
        print("    ❌ MongoDB: FAILED")

    print("\n[3] Testing AI API...")
    if settings.ai_api_key:
        print(f"    Base URL: {settings.ai_base_url} (model {settings.ai_model})")
        if get_ai_client().test_connection():
            print("    ✅ AI API: CONNECTED")
        else:
            print("    ❌ AI API: FAILED")
    else:
        print("    ⚠️  AI API: key not configured (AI tools will answer 503)")

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
