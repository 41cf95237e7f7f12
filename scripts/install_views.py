# scripts/install_views.py

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio

from eventrepo.config.settings import get_settings
from eventrepo.infrastructure.storage.couchdb import CouchDbStorageStrategy


async def install_views():
    app_settings = get_settings()
    couch = CouchDbStorageStrategy(
        base_url=app_settings.couchdb_url,
        database=app_settings.couchdb_database,
        design=app_settings.couchdb_design,
    )
    try:
        created_db = await couch.ensure_database()
        created_views = await couch.ensure_design_document()
    finally:
        await couch.aclose()
    print("Database created:" if created_db else "Database exists:", couch.database)
    print("Views installed:" if created_views else "Views already present:", couch.design)

asyncio.run(install_views())
