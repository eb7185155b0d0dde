"""Demo apparel catalog used by the ``seed_data`` and ``reset_demo`` commands.

Prices are in cents.  ``BASELINE_STOCK`` is the per-category stock that
``reset_demo`` restores.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

# (name, description, price_cents, stock, category)
CatalogEntry = Tuple[str, str, int, int, str]

DEMO_CUSTOMER = ("Alice Example", "alice@example.com")

CATALOG: List[CatalogEntry] = [
    # T-Shirts
    ("Classic Tee", "100% cotton classic t-shirt", 1799, 120, "T-Shirts"),
    ("Graphic Tee Mountain", "Graphic tee with mountain print", 2199, 80, "T-Shirts"),
    ("Graphic Tee Wave", "Graphic tee with ocean wave print", 2199, 90, "T-Shirts"),
    ("Pocket Tee", "Soft tee with chest pocket", 1999, 70, "T-Shirts"),
    ("Long Sleeve Tee", "Comfy long sleeve t-shirt", 2499, 60, "T-Shirts"),
    ("Vintage Wash Tee", "Garment-dyed vintage wash", 2399, 65, "T-Shirts"),
    ("Athletic Tee", "Moisture-wicking training tee", 2599, 75, "T-Shirts"),
    ("Ringer Tee", "Retro ringer t-shirt", 2099, 55, "T-Shirts"),
    # Hoodies
    ("Fleece Hoodie", "Warm fleece-lined hoodie", 4499, 40, "Hoodies"),
    ("Zip Hoodie", "Full-zip midweight hoodie", 4299, 50, "Hoodies"),
    ("Lightweight Hoodie", "Breathable hoodie for layering", 3899, 65, "Hoodies"),
    ("Oversized Hoodie", "Relaxed fit oversized hoodie", 4599, 30, "Hoodies"),
    ("Tech Hoodie", "Water-resistant hoodie", 4999, 25, "Hoodies"),
    # Shoes
    ("Canvas Sneakers", "Low-top canvas sneakers", 5499, 100, "Shoes"),
    ("Runner 200", "Lightweight running shoes", 7999, 70, "Shoes"),
    ("Trail Hiker", "All-terrain hiking shoes", 8999, 45, "Shoes"),
    ("Slip-On Loafers", "Casual loafers for everyday", 6999, 50, "Shoes"),
    ("Court Classics", "Retro court sneakers", 7499, 60, "Shoes"),
    ("City Boots", "Weather-ready ankle boots", 9999, 35, "Shoes"),
    ("Everyday Slides", "Comfort slides for home and out", 2999, 120, "Shoes"),
    ("Studio Trainers", "Cross-training studio shoes", 8299, 55, "Shoes"),
    # Hats
    ("Classic Cap", "Adjustable cotton baseball cap", 1999, 150, "Hats"),
    ("Dad Hat", "Relaxed fit cotton twill hat", 1899, 130, "Hats"),
    ("Trucker Hat", "Mesh back trucker cap", 2099, 140, "Hats"),
    ("Beanie", "Rib knit beanie", 1599, 160, "Hats"),
    ("Bucket Hat", "Reversible bucket hat", 2299, 90, "Hats"),
    ("Visor", "Sun visor for sports", 1499, 80, "Hats"),
    # Socks
    ("Ankle Socks 3-Pack", "Breathable ankle socks", 1299, 200, "Socks"),
    ("Crew Socks 3-Pack", "Soft cotton crew socks", 1399, 220, "Socks"),
    ("Wool Hikers", "Merino wool hiking socks", 1999, 90, "Socks"),
    ("No-Show Socks 3-Pack", "Invisible socks for low shoes", 1299, 210, "Socks"),
    # Jackets
    ("Denim Jacket", "Classic denim jacket", 8999, 40, "Jackets"),
    ("Windbreaker", "Packable windbreaker", 6999, 60, "Jackets"),
    ("Puffer Jacket", "Light puffer with recycled fill", 11999, 30, "Jackets"),
    ("Rain Shell", "Waterproof breathable shell", 10999, 35, "Jackets"),
    # Pants
    ("Chino Pants", "Slim-fit chinos", 4999, 80, "Pants"),
    ("Joggers", "Comfy knit joggers", 4499, 90, "Pants"),
    ("Denim Jeans", "Straight-leg jeans", 5999, 70, "Pants"),
    ("Tech Pants", "Stretch water-repellent pants", 6499, 60, "Pants"),
    ("Linen Trousers", "Breathable linen blend", 6999, 40, "Pants"),
    # Shorts
    ("Chino Shorts", "Casual chino shorts", 3999, 100, "Shorts"),
    ("Athletic Shorts", "Moisture-wicking shorts", 3499, 110, "Shorts"),
    ("Denim Shorts", "Classic denim shorts", 4299, 80, "Shorts"),
    ("Swim Trunks", "Quick-dry swim shorts", 3699, 90, "Shorts"),
    # Accessories
    ("Leather Belt", "Full-grain leather belt", 3499, 70, "Accessories"),
    ("Canvas Tote", "Durable everyday tote", 2499, 100, "Accessories"),
    ("Daypack", "Compact day backpack", 5499, 60, "Accessories"),
    ("Wool Scarf", "Soft wool scarf", 2999, 80, "Accessories"),
    ("Sunglasses Classic", "UV400 classic frame", 3599, 90, "Accessories"),
    ("Beanie with Pom", "Cozy beanie with pom", 1699, 100, "Accessories"),
]

BASELINE_STOCK: Dict[str, int] = {
    "T-Shirts": 120,
    "Hoodies": 65,
    "Shoes": 100,
    "Hats": 160,
    "Socks": 220,
    "Jackets": 60,
    "Pants": 90,
    "Shorts": 110,
    "Accessories": 100,
}
DEFAULT_BASELINE_STOCK = 100


def baseline_stock_for(category: str) -> int:
    return BASELINE_STOCK.get(category, DEFAULT_BASELINE_STOCK)
