"""Dinner recommendations generated from the current inventory."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from fresh_keeper.domain.chat import ChatMessage
from fresh_keeper.domain.errors import EmptyInventoryError
from fresh_keeper.domain.inventory import FoodItem
from fresh_keeper.domain.recipes import DinnerRecommendation
from fresh_keeper.services.chat import ChatService
from fresh_keeper.services.cookbook import CookbookService
from fresh_keeper.services.credentials import ModelPurpose
from fresh_keeper.services.parsing import parse_dinner_recommendation

RECOMMEND_MAX_TOKENS = 2000
RECOMMEND_TEMPERATURE = 0.7

CHEF_SYSTEM_PROMPT = (
    "You have the ability to search the internet for current information. "
    "When asked to create recipes or recommendations, draw on authentic, "
    "current recipes and cooking techniques from reputable sources."
)

_logger = logging.getLogger(__name__)


class CuisinePreference(str, Enum):
    """Cuisine family the recommendation should come from."""

    AUTO = "auto"
    CHINESE = "chinese"
    WESTERN = "western"

    @property
    def instruction(self) -> str:
        return _CUISINE_INSTRUCTIONS[self]


_CUISINE_INSTRUCTIONS = {
    CuisinePreference.AUTO: (
        "Prefer Chinese home cooking (家常菜), but suggest French or Italian "
        "if the ingredients are much better suited for it"
    ),
    CuisinePreference.CHINESE: (
        "Chinese cuisine ONLY (be specific: 川菜/Sichuan, 粤菜/Cantonese, "
        "江浙菜/Jiangzhe, etc.)"
    ),
    CuisinePreference.WESTERN: (
        "WESTERN cuisine ONLY - French or Italian ONLY. NEVER suggest Chinese "
        "dishes. Choose between authentic French (Coq au Vin, Boeuf "
        "Bourguignon, Ratatouille) or Italian (Carbonara, Risotto, Osso Buco)."
    ),
}


@dataclass(frozen=True)
class InventorySnapshot:
    """Non-expired items split by urgency."""

    expiring: list[FoodItem]
    fresh: list[FoodItem]
    now: datetime

    @classmethod
    def from_items(cls, items: Sequence[FoodItem], now: datetime) -> "InventorySnapshot":
        expiring = [item for item in items if item.is_expiring_soon(now)]
        fresh = [
            item
            for item in items
            if not item.is_expiring_soon(now) and not item.is_expired(now)
        ]
        return cls(expiring=expiring, fresh=fresh, now=now)

    @property
    def is_empty(self) -> bool:
        return not self.expiring and not self.fresh

    def describe(self) -> str:
        """Render the inventory block embedded in the prompt."""
        expiring_lines = [
            f"- {item.name}: {item.quantity} items, expires in "
            f"{item.days_until_expiry(self.now) or 0} days"
            for item in self.expiring
        ]
        fresh_lines = [f"- {item.name}: {item.quantity} items" for item in self.fresh]
        return (
            "Expiring Soon (use these first to reduce waste):\n"
            + "\n".join(expiring_lines)
            + "\n\nFresh Items:\n"
            + "\n".join(fresh_lines)
        )


def build_dinner_prompt(
    snapshot: InventorySnapshot, preference: CuisinePreference
) -> str:
    """Compose the user prompt for a dinner recommendation."""
    return f"""You are a professional chef specializing in home cooking. Create a \
delicious dinner recommendation that intelligently uses the available ingredients \
while suggesting additional items to buy if needed.

Available Inventory (prioritize using these, especially expiring items):
{snapshot.describe()}

Cuisine Preference: {preference.instruction}

IMPORTANT GUIDELINES:
1. Base the dish on authentic, proven recipes; do not limit yourself to the \
available ingredients.
2. Use expiring items where they fit naturally in the recipe.
3. You may suggest extra ingredients to buy from the supermarket to complete the dish.
4. Mark every ingredient with fromInventory true when it comes from the inventory \
above and false when it must be bought, and flag expiring inventory items.
5. For Chinese cuisine, be specific about the region (川菜/Sichuan, 粤菜/Cantonese, \
江浙菜/Jiangzhe, etc.).
6. For Western cuisine, ONLY French or Italian dishes are allowed.
7. Use authentic dish names (e.g. "Coq au Vin", "Carbonara", "麻婆豆腐").
8. Recipe steps must be detailed enough for a home cook to follow.

LANGUAGE REQUIREMENTS:
- Chinese dish: write the recipe steps and reason in Simplified Chinese (简体中文).
- Western (French/Italian) dish: write the recipe steps and reason in English.

Respond with ONLY a valid JSON object:
{{
    "dishName": "authentic name of the dish",
    "cuisine": "specific cuisine, e.g. 'Italian', 'French', 'Sichuan/川菜'",
    "ingredients": [
        {{"foodItem": "ingredient name", "quantity": "amount, e.g. '200g'", \
"isExpiringSoon": true/false, "fromInventory": true/false}}
    ],
    "recipe": ["Step 1", "Step 2", "..."],
    "cookingTime": "e.g. '30 minutes' for Western, '30分钟' for Chinese",
    "difficulty": "Easy/Medium/Hard for Western, 简单/中等/困难 for Chinese",
    "videoSearchChinese": "Chinese video search terms, always provided",
    "videoSearchEnglish": "English video search terms for Western dishes, otherwise null",
    "videoLink": "a specific tutorial URL if you know one, otherwise null",
    "reason": "why this dish makes sense",
    "shoppingList": ["items to buy from the supermarket"]
}}"""


@dataclass
class DinnerService:
    """Asks the reasoning model for a dinner and saves it to the cookbook."""

    chat: ChatService
    cookbook: CookbookService

    async def recommend_dinner(
        self,
        items: Sequence[FoodItem],
        preference: CuisinePreference,
        now: datetime,
    ) -> DinnerRecommendation:
        """Generate a recommendation and auto-save it as a recent recipe."""
        self.chat.require_api_key()
        snapshot = InventorySnapshot.from_items(items, now)
        if snapshot.is_empty:
            raise EmptyInventoryError()

        messages = [
            ChatMessage(role="system", content=CHEF_SYSTEM_PROMPT),
            ChatMessage(role="user", content=build_dinner_prompt(snapshot, preference)),
        ]
        content = await self.chat.complete(
            purpose=ModelPurpose.REASONING,
            messages=messages,
            max_output_tokens=RECOMMEND_MAX_TOKENS,
            temperature=RECOMMEND_TEMPERATURE,
        )
        recommendation = parse_dinner_recommendation(content)
        self.cookbook.save_recommendation(recommendation, now)
        _logger.info(
            "Recommended %s (%s) from %s expiring and %s fresh items",
            recommendation.dish_name,
            recommendation.cuisine,
            len(snapshot.expiring),
            len(snapshot.fresh),
        )
        return recommendation
