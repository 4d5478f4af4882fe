"""Payload builders shared by the tests."""

from __future__ import annotations

SECRET = "shopify-test-secret"
UPLOAD_URL = "https://cdn.uploadkit.io/files/{uuid}/photo.jpg"
UUIDS = [
    "3f1c9a52-8b7e-4d21-9f3a-6c2d1e0b7a14",
    "a0b1c2d3-e4f5-4a6b-8c7d-9e0f1a2b3c4d",
    "0f9e8d7c-6b5a-4c3d-2e1f-0a9b8c7d6e5f",
    "11111111-2222-4333-8444-555555555555",
]


def photo_properties(count: int) -> list[dict]:
    """Build `count` distinct UploadKit photo properties."""
    return [
        {"name": f"Photo {i + 1}", "value": UPLOAD_URL.format(uuid=UUIDS[i])}
        for i in range(count)
    ]


def order_payload(*line_items: dict, order_id: int = 5512345678) -> dict:
    return {
        "id": order_id,
        "order_number": 1042,
        "total_price": "24.90",
        "currency": "EUR",
        "line_items": list(line_items),
    }


def print_item(quantity: int, photos: int, title: str = "Tirage photo 10x15") -> dict:
    return {"title": title, "quantity": quantity, "properties": photo_properties(photos)}
