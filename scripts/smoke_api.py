#!/usr/bin/env python3
"""Walk through the main pantry flows against a running server."""

import json
import os
import sys

import requests

BASE_URL = os.getenv("PANTRY_API_URL", "http://localhost:8000")

def print_response(response):
    print(f"Status Code: {response.status_code}")
    print("Response Body:")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)
    print("-" * 50)

def add_item(name, quantity, unit="kilograms", category="", expiry_date=""):
    print(f"\nAdding {quantity} {unit} of {name}")
    data = {
        "name": name,
        "quantity": str(quantity),
        "unit": unit,
        "category": category,
        "expiry_date": expiry_date,
        "use_captured_image": "false",
    }
    response = requests.post(f"{BASE_URL}/inventory", data=data)
    print_response(response)
    return response

def adjust(name, direction):
    print(f"\n{direction.capitalize()} {name}")
    response = requests.post(f"{BASE_URL}/inventory/{name}/{direction}")
    print_response(response)
    return response

def search(term):
    print(f"\nSearching for '{term}'")
    response = requests.put(f"{BASE_URL}/view/search", json={"search_term": term})
    print_response(response)
    return response

def delete(name):
    print(f"\nDeleting {name}")
    requests.post(f"{BASE_URL}/inventory/{name}/delete-request")
    response = requests.delete(f"{BASE_URL}/inventory/{name}")
    print_response(response)
    return response

def main():
    name = "Smoke Test Milk"

    if add_item(name, 2, unit="liters", category="Produce").status_code != 200:
        print("Adding an item failed")
        sys.exit(1)

    # Same name again merges the quantities
    add_item(name, 3, unit="liters", category="Produce")
    adjust(name, "increment")
    adjust(name, "decrement")
    search("produce")
    delete(name)

if __name__ == "__main__":
    main()
