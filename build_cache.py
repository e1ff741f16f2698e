"""
Catalog Cache Build Script

Crawls the SCB catalog (default: the whole ssd database, English) and
saves the flattened cache to CSV for offline searches.

Set CACHE_START_PATH (environment or .env) to crawl a subtree only,
e.g. "AM/AM0101".

Note: The API allows 10 calls per 10 seconds. A full crawl makes one call
      per directory and one per table, so expect it to run for hours.
"""

import logging
import os
from datetime import datetime

from dotenv import load_dotenv

from scb_catalog.config import get_app_config
from scb_catalog.models import CacheRequest, SearchRequest
from scb_catalog.services import CatalogCacheService

load_dotenv()
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

print("=" * 80)
print("CATALOG CACHE BUILD: Statistics Sweden (SCB)")
print("=" * 80)

# === Step 1: Load Configuration ===
print("\n[Step 1] Loading configuration...")
config = get_app_config()
start_path = os.getenv("CACHE_START_PATH", "")
request = CacheRequest(initial_path=start_path)
print(f"  ✓ Config loaded")
print(f"    - API: {config.scb_base_url}")
print(f"    - Language: {request.lang}")
print(f"    - Database: {request.database_id}")
print(f"    - Start path: '{request.initial_path or '/'}'")
print(f"    - Rate limit: {config.rate_max_calls} calls / {config.rate_window_seconds:.0f}s")

# === Step 2: Crawl ===
print("\n[Step 2] Crawling catalog...")
start_time = datetime.now()

service = CatalogCacheService()
csv_path = service.initialize(request)

elapsed = (datetime.now() - start_time).total_seconds()

# === Step 3: Display Results ===
cache = service.get_all()
tables = service.search(SearchRequest(type="t"))
dated = tables[tables['date_start'].notna()]

print("\n" + "=" * 80)
print("CACHE BUILD COMPLETE")
print("=" * 80)
print()
print(f"⏱️  Total Time: {elapsed:.1f} seconds ({elapsed/60:.1f} minutes)")
print()
print("📊 Statistics:")
print(f"    ✓ Rows: {len(cache)}")
print(f"    ✓ Directories: {len(cache) - len(tables)}")
print(f"    ✓ Tables: {len(tables)} ({len(dated)} with a date range)")
print()
print(f"💾 Storage: {csv_path}")
print()
print("=" * 80)
