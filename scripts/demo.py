#!/usr/bin/env python3
"""
Demo script for the users and products services.

Talks to running services over HTTP: creates an entity, reads it back
twice (the second read is served from Redis) and shows the error bodies
for a missing and a malformed id.

    SERVICE_NAME=users python -m ecommerce &
    SERVICE_NAME=products python -m ecommerce &
    python scripts/demo.py
"""

import os
import time

import httpx

USERS_URL = os.getenv("USERS_URL", "http://localhost:8001")
PRODUCTS_URL = os.getenv("PRODUCTS_URL", "http://localhost:8002")


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def timed_get(client: httpx.Client, path: str) -> tuple[httpx.Response, float]:
    start_time = time.time()
    response = client.get(path)
    return response, (time.time() - start_time) * 1000


def demo_kind(base_url: str, collection: str, payload: dict) -> None:
    """Create one entity and read it back."""
    print_section(f"{collection} @ {base_url}")

    with httpx.Client(base_url=base_url, timeout=5.0) as client:
        health = client.get("/health")
        print(f"\n  Health: {health.json()}")

        created = client.post(f"/api/v1/{collection}", json=payload)
        print(f"\n  POST -> {created.status_code}: {created.json()}")
        if created.status_code != 201:
            return

        entity_id = created.json()["id"]
        for attempt in (1, 2):
            response, elapsed_ms = timed_get(client, f"/api/v1/{collection}/{entity_id}")
            print(f"  GET #{attempt} -> {response.status_code} in {elapsed_ms:.2f} ms")

        missing = client.get(f"/api/v1/{collection}/999999")
        print(f"\n  Missing id -> {missing.status_code}: {missing.json()}")

        malformed = client.get(f"/api/v1/{collection}/abc")
        print(f"  Malformed id -> {malformed.status_code}: {malformed.json()}")


def main() -> None:
    suffix = int(time.time())
    demo_kind(USERS_URL, "users", {"name": "Ada Lovelace", "email": f"ada+{suffix}@example.com"})
    demo_kind(PRODUCTS_URL, "products", {"name": "Desk lamp", "description": "LED, dimmable", "price": 24.5})


if __name__ == "__main__":
    try:
        main()
    except httpx.ConnectError as e:
        print(f"\n✗ Service not reachable: {e}")
        print("Start it with: SERVICE_NAME=users python -m ecommerce")
