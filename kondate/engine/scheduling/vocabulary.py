"""
Fixed keyword tables for conflict classification.

Matching is a plain, case-sensitive substring test against a step's
description, so terms are listed in the form they appear in step text.
Short appliance names are listed as phrases ('in a pot', 'frying pan') so
they do not fire inside words such as 'potato' or 'pancake'.
Japanese terms are included because generated recipes are often written
in Japanese.
"""

from typing import FrozenSet, Tuple

# Ingredients two steps may compete for
INGREDIENT_KEYWORDS: Tuple[str, ...] = (
    # Vegetables
    "onion", "garlic", "ginger", "carrot", "potato", "cabbage", "lettuce",
    "tomato", "cucumber", "spinach", "eggplant", "pepper", "mushroom",
    "broccoli", "daikon", "green onion", "scallion", "bean sprout",
    # Proteins
    "chicken", "pork", "beef", "fish", "salmon", "shrimp", "egg", "tofu",
    "bacon", "ham", "sausage",
    # Staples
    "rice", "noodle", "pasta", "bread", "flour", "udon", "soba",
    # Dairy and seasonings kept separate from equipment
    "milk", "cheese", "butter", "miso",
    # Japanese
    "玉ねぎ", "にんにく", "生姜", "にんじん", "じゃがいも", "キャベツ",
    "レタス", "トマト", "きゅうり", "ほうれん草", "なす", "ピーマン",
    "きのこ", "しめじ", "大根", "ねぎ", "もやし",
    "鶏肉", "豚肉", "牛肉", "ひき肉", "魚", "鮭", "えび", "卵", "豆腐",
    "ベーコン", "ハム", "ご飯", "米", "麺", "パスタ", "うどん", "パン",
    "小麦粉", "牛乳", "チーズ", "バター", "味噌",
)

# Appliances two steps may compete for; a conflict needs both steps to hit the same group
EQUIPMENT_GROUPS: Tuple[FrozenSet[str], ...] = (
    frozenset({
        "frying pan", "in a pan", "in the pan", "into the pan", "skillet", "wok",
        "fry", "stir-fry", "sauté", "saute", "sear",
        "フライパン", "炒め", "焼き",
    }),
    frozenset({
        "in a pot", "in the pot", "into the pot", "pot of", "stockpot", "saucepan",
        "boil", "simmer", "blanch", "poach",
        "鍋", "茹で", "煮",
    }),
    frozenset({
        "oven", "roast", "bake", "broil", "toaster",
        "オーブン", "トースター",
    }),
    frozenset({
        "microwave", "reheat", "defrost",
        "電子レンジ", "レンジ", "解凍",
    }),
    frozenset({
        "rice cooker", "炊飯器", "炊",
    }),
)
