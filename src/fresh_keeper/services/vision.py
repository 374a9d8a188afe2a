"""Food identification from photos using a vision-capable chat model."""

from dataclasses import dataclass

from fresh_keeper.domain.chat import ChatMessage, ContentPart, ImageUrl
from fresh_keeper.domain.vision import (
    CONFIDENCE_LEVELS,
    FOOD_CATEGORY_LABELS,
    FoodIdentification,
)
from fresh_keeper.services.chat import ChatService
from fresh_keeper.services.credentials import ModelPurpose
from fresh_keeper.services.images import prepare_image, to_data_url
from fresh_keeper.services.parsing import parse_food_identification

IDENTIFY_MAX_TOKENS = 150
IDENTIFY_TEMPERATURE = 0.2


def identification_prompt() -> str:
    """System instruction with the closed category vocabulary."""
    categories = ", ".join(FOOD_CATEGORY_LABELS)
    confidences = ", ".join(CONFIDENCE_LEVELS)
    return (
        "You are a food identification expert. Analyze the image and identify "
        "the food item.\n\n"
        "Respond with ONLY a valid JSON object and no other text, using this "
        "exact format:\n"
        "{\n"
        '    "foodName": "specific name of the food",\n'
        f'    "category": "exactly one of: {categories}",\n'
        f'    "confidence": "exactly one of: {confidences}",\n'
        '    "additionalInfo": "brief note if relevant or null"\n'
        "}\n\n"
        "Rules:\n"
        '- Be specific with food names (e.g. "Granny Smith Apples", not '
        '"Apples").\n'
        f"- The category must be exactly one of the {len(FOOD_CATEGORY_LABELS)} "
        "options above, matching case and ampersands.\n"
        '- Use "Vegetables" for all vegetables including tofu.\n'
        '- Use "Meat" for meat, poultry, seafood and fish.\n'
        '- Use "Dairy & Eggs" for milk, cheese, yogurt and eggs.\n'
        '- Use "Seasonings & Sauces" for oils, vinegar, garlic, ginger, spices '
        "and condiments.\n"
        '- Use "Grains & Pasta" for rice, noodles, pasta, flour and bread.\n'
        '- Use "Canned & Packaged" for canned, jarred and shelf-stable '
        "packaged foods.\n"
        '- Use "Frozen" for frozen foods, ice cream and frozen meals.\n'
        '- Use "Snacks" for chips, nuts and crackers.\n'
        f"- Confidence must be exactly one of: {confidences}.\n"
        "- Do not use markdown or code blocks."
    )


@dataclass
class FoodVisionService:
    """Identifies a single food item in a photo."""

    chat: ChatService
    max_dimension: int = 1024
    jpeg_quality: int = 70
    max_bytes: int = 20_000_000

    async def identify_food(self, image_bytes: bytes) -> FoodIdentification:
        """Return the model's identification of the pictured food."""
        self.chat.require_api_key()
        jpeg = prepare_image(
            image_bytes,
            max_dimension=self.max_dimension,
            quality=self.jpeg_quality,
            max_bytes=self.max_bytes,
        )
        messages = [
            ChatMessage(role="system", content=identification_prompt()),
            ChatMessage(
                role="user",
                content=[
                    ContentPart(type="text", text="What food is in this image?"),
                    ContentPart(
                        type="image_url",
                        image_url=ImageUrl(url=to_data_url(jpeg), detail="low"),
                    ),
                ],
            ),
        ]
        content = await self.chat.complete(
            purpose=ModelPurpose.VISION,
            messages=messages,
            max_output_tokens=IDENTIFY_MAX_TOKENS,
            temperature=IDENTIFY_TEMPERATURE,
        )
        return parse_food_identification(content)
