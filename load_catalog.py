"""
Seed the career and course catalogs from CSV files.

List columns (required_skills, interests, skills_gained) are ";"-separated.
Rows whose title already exists in the catalog are skipped.

Usage: python load_catalog.py [careers.csv] [courses.csv]
"""

import sys
import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from database import RecordStore, verify_tables_exist

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"

CATALOGS = {
    "careers": {
        "columns": ["title", "description", "required_skills", "interests"],
        "list_columns": ["required_skills", "interests"],
    },
    "courses": {
        "columns": ["title", "description", "level", "skills_gained"],
        "list_columns": ["skills_gained"],
    },
}

def split_list(value) -> List[str]:
    if pd.isna(value):
        return []
    return [item.strip() for item in str(value).split(";") if item.strip()]

def read_catalog(csv_path: Path, entity: str) -> List[Dict]:
    """Read and clean one catalog CSV into insertable records."""
    catalog = CATALOGS[entity]
    df = pd.read_csv(csv_path)

    missing = [c for c in catalog["columns"] if c not in df.columns]
    if missing:
        raise ValueError(f"{csv_path} is missing columns: {missing}")

    # Keep only required columns
    df = df[catalog["columns"]].copy()

    # Drop rows without a title
    df = df.dropna(subset=["title"])
    df["title"] = df["title"].astype(str).str.strip()
    df = df.drop_duplicates(subset=["title"])

    for column in catalog["list_columns"]:
        df[column] = df[column].apply(split_list)

    df = df.fillna("")
    return df.to_dict(orient="records")

def load_catalog(store: RecordStore, csv_path: Path, entity: str) -> int:
    """Insert catalog rows that are not present yet. Returns the number inserted."""
    existing = {row["title"] for row in store.list(entity)}
    inserted = 0

    for record in read_catalog(csv_path, entity):
        if record["title"] in existing:
            continue
        store.insert(entity, record)
        inserted += 1

    logger.info(f"Loaded {inserted} new {entity} from {csv_path}")
    return inserted

if __name__ == "__main__":
    careers_csv = Path(sys.argv[1]) if len(sys.argv) > 1 else DATA_DIR / "careers.csv"
    courses_csv = Path(sys.argv[2]) if len(sys.argv) > 2 else DATA_DIR / "courses.csv"

    verify_tables_exist()
    store = RecordStore()
    load_catalog(store, careers_csv, "careers")
    load_catalog(store, courses_csv, "courses")
