"""Image encoder — file bytes to base64 data URIs for the oracle request."""
import asyncio
import base64
import mimetypes
from dataclasses import dataclass
from typing import Iterable, Optional

from src.constants import DEFAULT_MIME_TYPE


@dataclass(frozen=True)
class ImageFile:
    name: str
    data: bytes
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class EncodedImage:
    name: str
    mime_type: str
    data_b64: str

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data_b64}"


def guess_mime_type(name: str, declared: Optional[str] = None) -> str:
    match declared:
        case str() as m if m:
            return m
        case _:
            guessed, _ = mimetypes.guess_type(name)
            return guessed or DEFAULT_MIME_TYPE


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.standard_b64encode(data).decode()}"


def encode_image(image: ImageFile) -> EncodedImage:
    return EncodedImage(
        name=image.name,
        mime_type=guess_mime_type(image.name, image.mime_type),
        data_b64=base64.standard_b64encode(image.data).decode(),
    )


async def encode_all(images: Iterable[ImageFile]) -> list[EncodedImage]:
    """Encode every image on a worker thread; result order matches input order."""
    return list(await asyncio.gather(
        *map(lambda img: asyncio.to_thread(encode_image, img), images)
    ))
