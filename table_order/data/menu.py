"""Default catalog loaded into a fresh store."""

from __future__ import annotations

from typing import Any, Dict, List

from table_order.schemas.menu import Category, MenuItem

CATEGORIES: List[Dict[str, Any]] = [
    {"id": "appetizers", "name": "Appetizers", "icon": "🥟", "description": "Small plates to start"},
    {"id": "mains", "name": "Main Dishes", "icon": "🍲", "description": "Traditional and grilled favourites"},
    {"id": "sides", "name": "Sides", "icon": "🥗", "description": "Relishes and vegetables"},
    {"id": "beverages", "name": "Beverages", "icon": "🥤", "description": "Cold and hot drinks"},
    {"id": "desserts", "name": "Desserts", "icon": "🍰", "description": "Something sweet"},
]

MENU_ITEMS: List[Dict[str, Any]] = [
    {
        "id": "samosas",
        "name": "Beef Samosas",
        "description": "Crispy pastry filled with spiced minced beef",
        "price": "35.00",
        "category": "appetizers",
        "preparation_time": 10,
        "spicy_level": "medium",
        "dietary": ["halal"],
        "allergens": ["gluten"],
        "ingredients": ["beef", "onion", "pastry", "curry spice"],
        "popularity": 4,
    },
    {
        "id": "chikanda",
        "name": "Chikanda",
        "description": "African polony made from wild orchid tubers and groundnuts",
        "price": "30.00",
        "category": "appetizers",
        "preparation_time": 5,
        "dietary": ["vegetarian", "vegan", "gluten-free"],
        "allergens": ["peanuts"],
        "ingredients": ["orchid tubers", "groundnuts", "chilli"],
        "popularity": 3,
    },
    {
        "id": "vinkubala",
        "name": "Vinkubala",
        "description": "Fried mopane caterpillars with tomato and onion",
        "price": "55.00",
        "category": "appetizers",
        "preparation_time": 15,
        "spicy_level": "hot",
        "dietary": ["gluten-free"],
        "ingredients": ["mopane caterpillars", "tomato", "onion"],
        "popularity": 2,
    },
    {
        "id": "nshima",
        "name": "Nshima",
        "description": "Stiff maize porridge, the Zambian staple",
        "price": "45.00",
        "category": "mains",
        "preparation_time": 10,
        "dietary": ["vegetarian", "vegan", "gluten-free"],
        "ingredients": ["white maize meal"],
        "nutritional_info": {"calories": 360, "protein": 8, "carbs": 78, "fat": 2},
        "popularity": 5,
    },
    {
        "id": "grilled-chicken",
        "name": "Grilled Chicken",
        "description": "Quarter village chicken flame grilled with peri-peri",
        "price": "85.00",
        "category": "mains",
        "preparation_time": 20,
        "spicy_level": "hot",
        "dietary": ["halal", "gluten-free"],
        "ingredients": ["chicken", "peri-peri", "garlic", "lemon"],
        "nutritional_info": {"calories": 520, "protein": 45, "carbs": 4, "fat": 32},
        "popularity": 5,
    },
    {
        "id": "ifisashi",
        "name": "Ifisashi",
        "description": "Greens simmered in a creamy groundnut sauce",
        "price": "40.00",
        "category": "mains",
        "preparation_time": 15,
        "dietary": ["vegetarian", "vegan", "gluten-free"],
        "allergens": ["peanuts"],
        "ingredients": ["pumpkin leaves", "groundnuts", "tomato", "onion"],
        "popularity": 4,
    },
    {
        "id": "kapenta",
        "name": "Kapenta with Nshima",
        "description": "Dried lake sardines cooked with tomato, served with nshima",
        "price": "60.00",
        "category": "mains",
        "preparation_time": 15,
        "spicy_level": "mild",
        "dietary": ["gluten-free"],
        "allergens": ["fish"],
        "ingredients": ["kapenta", "tomato", "onion", "maize meal"],
        "popularity": 4,
    },
    {
        "id": "tbone",
        "name": "T-Bone Steak",
        "description": "Zambeef T-bone with chips and relish",
        "price": "150.00",
        "category": "mains",
        "preparation_time": 25,
        "spicy_level": "mild",
        "dietary": ["halal"],
        "ingredients": ["beef", "potatoes", "tomato relish"],
        "popularity": 3,
    },
    {
        "id": "chibwabwa",
        "name": "Chibwabwa",
        "description": "Pumpkin leaves with tomato and onion",
        "price": "25.00",
        "category": "sides",
        "preparation_time": 10,
        "dietary": ["vegetarian", "vegan", "gluten-free"],
        "ingredients": ["pumpkin leaves", "tomato", "onion"],
        "popularity": 3,
    },
    {
        "id": "coleslaw",
        "name": "Coleslaw",
        "description": "Shredded cabbage and carrot in a light dressing",
        "price": "20.00",
        "category": "sides",
        "preparation_time": 5,
        "dietary": ["vegetarian", "gluten-free"],
        "allergens": ["egg"],
        "ingredients": ["cabbage", "carrot", "mayonnaise"],
    },
    {
        "id": "maheu",
        "name": "Maheu",
        "description": "Traditional fermented maize drink",
        "price": "15.00",
        "category": "beverages",
        "preparation_time": 2,
        "dietary": ["vegetarian", "vegan"],
        "ingredients": ["maize", "sugar"],
        "popularity": 4,
    },
    {
        "id": "munkoyo",
        "name": "Munkoyo",
        "description": "Sweet root-brewed maize beverage",
        "price": "18.00",
        "category": "beverages",
        "preparation_time": 2,
        "dietary": ["vegetarian", "vegan", "gluten-free"],
        "ingredients": ["maize", "munkoyo root"],
        "popularity": 3,
    },
    {
        "id": "rooibos",
        "name": "Rooibos Tea",
        "description": "Caffeine-free red bush tea",
        "price": "12.00",
        "category": "beverages",
        "preparation_time": 3,
        "dietary": ["vegetarian", "vegan", "gluten-free"],
        "ingredients": ["rooibos"],
    },
    {
        "id": "fritters",
        "name": "Banana Fritters",
        "description": "Fried banana fritters dusted with cinnamon sugar",
        "price": "30.00",
        "category": "desserts",
        "preparation_time": 10,
        "dietary": ["vegetarian"],
        "allergens": ["gluten", "egg"],
        "ingredients": ["banana", "flour", "cinnamon"],
        "popularity": 4,
    },
    {
        "id": "pumpkin-pudding",
        "name": "Pumpkin Pudding",
        "description": "Baked pumpkin custard",
        "price": "35.00",
        "category": "desserts",
        "available": False,
        "preparation_time": 12,
        "dietary": ["vegetarian", "gluten-free"],
        "allergens": ["milk", "egg"],
        "ingredients": ["pumpkin", "milk", "egg", "nutmeg"],
        "popularity": 2,
    },
]


def default_categories() -> List[Category]:
    return [Category(**entry) for entry in CATEGORIES]


def default_menu() -> List[MenuItem]:
    return [MenuItem(**entry) for entry in MENU_ITEMS]
