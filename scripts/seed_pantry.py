#!/usr/bin/env python3
"""
Demo Data Script for the Pantry Tracker

This script fills the inventory collection with a handful of pantry items
for testing and presentation purposes. Existing items with the same names
are replaced.
"""

import random
import sys
from datetime import date, timedelta
from pathlib import Path

# Add parent directory to path so we can import from the main application
sys.path.append(str(Path(__file__).parent.parent))

from database.db import get_sync_db, INVENTORY_COLLECTION, DATABASE_NAME
from database.operations import to_document
from models.inventory import Unit, Category

# Demo data: name -> (unit, category, shelf life in days)
DEMO_ITEMS = {
    "Apples": (Unit.KILOGRAMS, Category.PRODUCE, 21),
    "Carrots": (Unit.POUNDS, Category.PRODUCE, 28),
    "Spinach": (Unit.KILOGRAMS, Category.PRODUCE, 7),
    "Eggs": (Unit.DOZEN, Category.PRODUCE, 30),
    "Ketchup": (Unit.LITERS, Category.CONDIMENTS, 180),
    "Olive Oil": (Unit.LITERS, Category.CONDIMENTS, 365),
    "Mustard": (Unit.LITERS, Category.CONDIMENTS, 365),
    "Ibuprofen": (Unit.DOZEN, Category.PHARMA, 730),
    "Chicken Breast": (Unit.POUNDS, Category.MEAT_POULTRY, 3),
    "Ground Beef": (Unit.KILOGRAMS, Category.MEAT_POULTRY, 2),
}

def build_demo_item(unit: Unit, category: Category, shelf_life_days: int):
    expiry = date.today() + timedelta(days=random.randint(1, shelf_life_days))
    return {
        "quantity": random.randint(1, 6),
        "unit": unit.value,
        "expiry_date": expiry.isoformat(),
        "category": category.value,
        "image_url": "",
    }

def main():
    print(f"\n=== SEEDING PANTRY ({DATABASE_NAME}) ===\n")
    collection = get_sync_db()[INVENTORY_COLLECTION]

    for name, (unit, category, shelf_life_days) in DEMO_ITEMS.items():
        document = to_document(build_demo_item(unit, category, shelf_life_days))
        collection.replace_one({"_id": name}, document, upsert=True)
        print(f"  {name}: {document['quantity']} {document['unit']} ({document['category']}), expires {document['expiryDate']}")

    print(f"\nSeeded {len(DEMO_ITEMS)} pantry items")

if __name__ == "__main__":
    main()
