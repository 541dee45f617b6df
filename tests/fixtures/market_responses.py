"""
Mock CSFloat listings responses for testing (prices in cents).
"""

LISTING_DEAL = {
    "id": "812345",
    "created_at": "2024-03-11T20:00:00Z",
    "price": 8500,
    "type": "buy_now",
    "item": {"market_hash_name": "AK-47 | Redline (Field-Tested)", "float_value": 0.21},
    "reference": {"base_price": 10000, "predicted_price": 10000, "quantity": 412},
}

LISTING_FAIR = {
    "id": "812346",
    "created_at": "2024-03-11T20:01:00Z",
    "price": 9900,
    "type": "buy_now",
    "item": {"market_hash_name": "AWP | Asiimov (Field-Tested)"},
    "reference": {"base_price": 10000, "predicted_price": 10000, "quantity": 120},
}

LISTING_WITHOUT_REFERENCE = {
    "id": "812347",
    "created_at": "2024-03-11T20:02:00Z",
    "price": 1200,
    "type": "auction",
    "item": {"market_hash_name": "Sticker | Crown (Foil)"},
}

LISTINGS_RESPONSE = {"data": [LISTING_DEAL, LISTING_FAIR, LISTING_WITHOUT_REFERENCE]}
