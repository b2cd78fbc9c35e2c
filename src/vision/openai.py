"""OpenAIMatchingClient — OpenAI Responses API vision backend."""
from typing import Any

from openai import AsyncOpenAI

from src.constants import OPENAI_VISION_MODEL
from src.encoder import EncodedImage
from src.vision.client import MatchingClient


def _image_block(image: EncodedImage) -> dict:
    return {"type": "input_image", "image_url": image.data_uri}


def _output_text(response: Any) -> str:
    """Text of the first content part of the first output item, else output_text."""
    try:
        text = response.output[0].content[0].text
    except (AttributeError, IndexError, TypeError):
        text = getattr(response, "output_text", None)
    return text if isinstance(text, str) else ""


class OpenAIMatchingClient(MatchingClient):

    def __init__(self, api_key: str, model: str = OPENAI_VISION_MODEL) -> None:
        self._api_key = api_key
        self._model = model

    async def compare(
        self,
        prompt: str,
        reference: EncodedImage,
        group: list[EncodedImage],
    ) -> str:
        client = AsyncOpenAI(api_key=self._api_key)
        response = await client.responses.create(
            model=self._model,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        _image_block(reference),
                        *map(_image_block, group),
                    ],
                }
            ],
        )
        return _output_text(response).strip()
