#!/usr/bin/env python

import argparse
import sqlite3
from pathlib import Path
from typing import List

from photo_bank.database.ops import PhotoCatalog
from photo_bank.models import CatalogRecord
from photo_bank.scanning.filesystem import category_name


def connect_db(db_path: Path) -> sqlite3.Connection:
    if not db_path.exists():
        raise SystemExit(f"DB not found: {db_path}")
    return sqlite3.connect(db_path)


def print_records(records: List[CatalogRecord]):
    print("category     | filename                       | keywords")
    print("-------------+--------------------------------+----------")
    for rec in records:
        print(f"{rec.category.ljust(12)} | {rec.filename.ljust(30)} | {', '.join(rec.keywords)}")


def list_category(conn: sqlite3.Connection, category: str):
    records = PhotoCatalog(conn).in_category(category)
    if not records:
        print(f"No photos in category {category}")
        return
    print(f"{category_name(category) or category}: {len(records)} photos")
    print_records(records)


def list_keyword(conn: sqlite3.Connection, keyword: str):
    records = PhotoCatalog(conn).with_keyword(keyword)
    if not records:
        print(f"No photos with keyword '{keyword}'")
        return
    print(f"'{keyword}': {len(records)} photos")
    print_records(records)


def show_photo(conn: sqlite3.Connection, path: Path):
    rec = PhotoCatalog(conn).fetch(str(path))
    if rec is None:
        print(f"No photo at {path}")
        return
    print("Photo:")
    print(f"  path:      {rec.path}")
    print(f"  category:  {rec.category}")
    print(f"  name:      {rec.name}")
    print(f"  keywords:  {', '.join(rec.keywords)}")


def parse_args():
    p = argparse.ArgumentParser(description="Query helper for the photo bank catalog.")
    p.add_argument("--db", type=Path, required=True, help="Path to photo_catalog.db")
    sub = p.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("category", help="List photos in a category (e.g. 2017/3)")
    c.add_argument("category")

    k = sub.add_parser("keyword", help="List photos with a keyword")
    k.add_argument("keyword")

    s = sub.add_parser("photo", help="Show the catalog entry for a photo path")
    s.add_argument("path", type=Path)

    return p.parse_args()


def main():
    args = parse_args()
    conn = connect_db(args.db)
    try:
        if args.cmd == "category":
            list_category(conn, args.category)
        elif args.cmd == "keyword":
            list_keyword(conn, args.keyword)
        elif args.cmd == "photo":
            show_photo(conn, args.path)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
