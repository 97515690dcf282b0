"""
Sample receipts for the in-memory backend.

A small, static set of rows in the same shape the hosted backend returns
(nested nutritional_info included), in English and Spanish. Used for local
demos with RECEIPTS_BACKEND=memory and as fixtures in tests.
"""

from typing import Any, Dict, List

SAMPLE_RECEIPTS: List[Dict[str, Any]] = [
    {
        "id": "0b6f7d52-3c1e-4a53-9f0e-5a0d5c1e7a01",
        "nutritional_info_id": "7c1d0e2f-8a4b-4c3d-9e5f-6a7b8c9d0001",
        "language": "en",
        "slug": "mango-smoothie",
        "title": "Mango Smoothie",
        "perfect_for": "A quick summer breakfast",
        "image_url": "https://images.example.com/receipts/mango-smoothie.jpg",
        "image_alt_text": "A glass of mango smoothie",
        "prep_time": "5 min",
        "calories": "180 kcal",
        "ingredients": ["mango", "yogurt"],
        "benefits": ["Rich in vitamin C", {"title": "Probiotics", "description": "Yogurt supports digestion"}],
        "how_to_prepare": "Peel and dice the mango. Blend with the yogurt until smooth. Serve cold.",
        "quote": "Sunshine in a glass.",
        "tags": [{"text": "vegetarian", "style": "green"}, "quick"],
        "category": "Breakfast",
        "nutritional_info": {
            "id": "7c1d0e2f-8a4b-4c3d-9e5f-6a7b8c9d0001",
            "calories_kcal": 180,
            "protein_g": 6.5,
            "carbohydrates_g": 32,
            "fats_g": 2.5,
            "fiber_g": 3,
            "sugars_g": 28,
            "sodium_mg": 60,
        },
    },
    {
        "id": "0b6f7d52-3c1e-4a53-9f0e-5a0d5c1e7a02",
        "nutritional_info_id": "7c1d0e2f-8a4b-4c3d-9e5f-6a7b8c9d0002",
        "language": "es",
        "slug": "mango-smoothie",
        "title": "Batido de mango",
        "perfect_for": "Un desayuno rápido de verano",
        "image_url": "https://images.example.com/receipts/mango-smoothie.jpg",
        "image_alt_text": "Un vaso de batido de mango",
        "prep_time": "5 min",
        "calories": "180 kcal",
        "ingredients": ["mango", "yogur"],
        "benefits": ["Rico en vitamina C"],
        "how_to_prepare": "Pela y corta el mango. Tritúralo con el yogur hasta que quede suave. Sírvelo frío.",
        "quote": None,
        "tags": [{"text": "vegetariano", "style": "green"}, "rápido"],
        "category": "Desayuno",
        "nutritional_info": {
            "id": "7c1d0e2f-8a4b-4c3d-9e5f-6a7b8c9d0002",
            "calories_kcal": 180,
            "protein_g": 6.5,
            "carbohydrates_g": 32,
            "fats_g": 2.5,
            "fiber_g": 3,
            "sugars_g": 28,
            "sodium_mg": 60,
        },
    },
    {
        "id": "0b6f7d52-3c1e-4a53-9f0e-5a0d5c1e7a03",
        "nutritional_info_id": None,
        "language": "en",
        "slug": "lentil-soup",
        "title": "Red Lentil Soup",
        "perfect_for": None,
        "image_url": None,
        "image_alt_text": None,
        "prep_time": "30 min",
        "calories": None,
        "ingredients": [
            {"name": "red lentils", "quantity": "200 g"},
            {"name": "carrot", "amount": 1},
            {"name": "vegetable stock", "amount": 1, "unit": "l"},
            "cumin",
        ],
        "benefits": [],
        "how_to_prepare": "Simmer the lentils and carrot in the stock for 20 minutes, season with cumin and blend.",
        "quote": None,
        "tags": None,
        "category": "Soup",
        "nutritional_info": None,
    },
]
