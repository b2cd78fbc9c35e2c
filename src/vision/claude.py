"""ClaudeMatchingClient — Anthropic Claude vision backend."""
from anthropic import AsyncAnthropic

from src.constants import CLAUDE_MAX_TOKENS, CLAUDE_VISION_MODEL
from src.encoder import EncodedImage
from src.vision.client import MatchingClient


def _image_block(image: EncodedImage) -> dict:
    return {
        "type": "image",
        "source": {
            "type": "base64",
            "media_type": image.mime_type,
            "data": image.data_b64,
        },
    }


class ClaudeMatchingClient(MatchingClient):

    def __init__(self, api_key: str, model: str = CLAUDE_VISION_MODEL) -> None:
        self._api_key = api_key
        self._model = model

    async def compare(
        self,
        prompt: str,
        reference: EncodedImage,
        group: list[EncodedImage],
    ) -> str:
        client = AsyncAnthropic(api_key=self._api_key)
        message = await client.messages.create(
            model=self._model,
            max_tokens=CLAUDE_MAX_TOKENS,
            messages=[
                {
                    "role": "user",
                    "content": [
                        _image_block(reference),
                        *map(_image_block, group),
                        {"type": "text", "text": prompt},
                    ],
                }
            ],
        )
        text = "".join(
            getattr(block, "text", "") for block in message.content if getattr(block, "type", "text") == "text"
        )
        return text.strip()
