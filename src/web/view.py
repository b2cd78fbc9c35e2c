"""Pure rendering helpers for the Streamlit page (no streamlit import here)."""
from typing import Iterable, Sequence

from src.constants import (
    CAPTION_IMAGE_MARKED,
    COLOR_MATCH,
    COLOR_NO_MATCH,
    IMAGE_CARD_HTML,
    LABEL_NORMALIZED_INDICES,
    MARKER_MATCH,
    MARKER_NO_MATCH,
    MSG_MATCHES,
    MSG_NO_MATCHES,
    MSG_REQUEST_ERROR,
)
from src.encoder import ImageFile, guess_mime_type, to_data_uri
from src.matcher import MatchResult


def marker(matched: bool) -> str:
    return MARKER_MATCH if matched else MARKER_NO_MATCH


def marker_color(matched: bool) -> str:
    return COLOR_MATCH if matched else COLOR_NO_MATCH


def format_indices(indices: Iterable[int]) -> str:
    return LABEL_NORMALIZED_INDICES % ", ".join(map(str, indices))


def group_captions(result: MatchResult) -> list[str]:
    return [
        CAPTION_IMAGE_MARKED % (position + 1, marker(matched))
        for position, matched in enumerate(result.markers())
    ]


def describe_result(result: MatchResult) -> str:
    match (result.error, result.indices):
        case (str() as err, _):
            return MSG_REQUEST_ERROR % err
        case (None, ()):
            return MSG_NO_MATCHES
        case (None, found):
            return MSG_MATCHES % (len(found), result.group_count)


def bordered_image_html(data_uri: str, matched: bool, caption: str) -> str:
    """Group photo with a coloured border and a corner badge."""
    return IMAGE_CARD_HTML.format(
        color=marker_color(matched),
        uri=data_uri,
        marker=marker(matched),
        caption=caption,
    )


def image_cards(result: MatchResult, group: Sequence[ImageFile]) -> list[str]:
    """One card per submitted group photo, in submission order."""
    return [
        bordered_image_html(
            to_data_uri(image.data, guess_mime_type(image.name, image.mime_type)),
            matched,
            caption,
        )
        for image, matched, caption in zip(group, result.markers(), group_captions(result))
    ]
