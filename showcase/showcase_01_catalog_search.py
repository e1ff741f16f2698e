"""
Showcase 01: Crawl, Search and Query the SCB Catalog

This showcase demonstrates the main workflow:
1. Browse the catalog interactively with ScbQuery.list()
2. Crawl a small subtree into a flattened cache (saved to CSV)
3. Search the cache offline by path, label, variables and year
4. Query one of the tables found

Subtree Demonstrated:
- AM/AM0110/AM0110A: average monthly salary (two tables)

Requirements:
- Internet connection (no API key needed)
- The API allows 10 calls per 10 seconds; the crawl below takes a few seconds

Status: Live demonstration with the real SCB API
"""

import time
import warnings

print("=" * 80)
print("SHOWCASE 01: Crawl, Search and Query the SCB Catalog")
print("=" * 80)

# === Step 1: Setup ===

print("\n[Step 1] Importing modules...")
from scb_catalog import CatalogCacheService, CacheRequest, ScbQuery, search
from scb_catalog.config import get_app_config
from scb_catalog.errors import AmbiguousSearchFiltersWarning

config = get_app_config()
print(f"  ✓ Config loaded")
print(f"    - API: {config.scb_base_url}")
print(f"    - Cache dir: {config.cache_db_dir}")

START_PATH = "AM/AM0110/AM0110A"

# === Step 2: Browse ===

print("\n" + "=" * 80)
print("[Step 2] Browsing the catalog")
print("=" * 80)

scb = ScbQuery()
for node in scb.list()[:5]:
    print(f"  [{node.type}] {node.id}: {node.text}")
print("  ...")

# === Step 3: Crawl a subtree ===

print("\n" + "=" * 80)
print(f"[Step 3] Crawling '{START_PATH}'")
print("=" * 80)

start_time = time.time()
service = CatalogCacheService()
csv_path = service.initialize(CacheRequest(initial_path=START_PATH))
crawl_time = time.time() - start_time

entries = service.get_entries()
print(f"  ✓ Crawled {len(entries)} rows in {crawl_time:.1f}s")
print(f"  ✓ CSV saved to: {csv_path}")
for entry in entries:
    dates = f" ({entry.date_start}-{entry.date_end})" if entry.date_start else ""
    print(f"    {'  ' * (entry.depth - 1)}{entry}{dates}")

# === Step 4: Search offline ===

print("\n" + "=" * 80)
print("[Step 4] Searching the cache (no API calls)")
print("=" * 80)

tables = search(entries, type="t")
print(f"\n  Tables: {len(tables)}")

by_sector = search(entries, type="t", var_desc="sector", ignore_case=True)
print(f"  Tables with a 'sector' variable: {[t.id for t in by_sector]}")

recent = search(entries, type="t", year=2020)
print(f"  Tables covering 2020: {[t.id for t in recent]}")

with warnings.catch_warnings(record=True) as caught:
    warnings.simplefilter("always", AmbiguousSearchFiltersWarning)
    search(entries, var_desc="sex")
print(f"  Table-only filter without type warns: {caught[0].message if caught else 'no warning'}")

# === Step 5: Query a table ===

print("\n" + "=" * 80)
print("[Step 5] Querying a table")
print("=" * 80)

if tables:
    table = tables[0]
    metadata = scb.list(table.id)
    time_code = metadata.time_variable.code
    df = scb.query(table.id, {"code": time_code, "filter": "top", "values": ["1"]})
    print(f"\n  {metadata.title}")
    print(df.head(10).to_string(index=False))

print("\n" + "=" * 80)
print("SHOWCASE COMPLETE")
print("=" * 80)
