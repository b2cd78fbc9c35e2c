"""PhotoMatcher — one submission: validate, encode, ask the oracle, normalize."""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from src.constants import (
    MATCH_PROMPT,
    MSG_BUSY,
    MSG_MISSING_INPUT,
    MSG_NORMALIZED,
    MSG_ORACLE_DONE,
    MSG_ORACLE_FAILED,
    MSG_SUBMITTING,
)
from src.encoder import ImageFile, encode_all, encode_image
from src.normalizer import extract_match_indices
from src.vision.client import MatchingClient

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], MatchingClient]


class MissingInputError(ValueError):
    """Credential, reference photo or group photos were not supplied."""


class MatcherBusyError(RuntimeError):
    """A submission is already in flight."""


@dataclass(frozen=True)
class MatchResult:
    raw_output: str
    indices: tuple[int, ...]
    group_count: int
    error: Optional[str] = None

    def is_match(self, position: int) -> bool:
        """position is 0-based; indices are 1-based."""
        return position + 1 in self.indices

    def markers(self) -> list[bool]:
        return list(map(self.is_match, range(self.group_count)))


class PhotoMatcher:
    """Runs at most one comparison at a time against an injected oracle."""

    def __init__(self, client_factory: ClientFactory) -> None:
        self._client_factory = client_factory
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def submit(
        self,
        api_key: str,
        reference: Optional[ImageFile],
        group: Sequence[ImageFile],
    ) -> MatchResult:
        match (api_key, reference, list(group or [])):
            case ("" | None, _, _) | (_, None, _) | (_, _, []):
                raise MissingInputError(MSG_MISSING_INPUT)
            case _:
                pass
        if self._busy:
            raise MatcherBusyError(MSG_BUSY)

        self._busy = True
        try:
            return await self._run(api_key, reference, list(group))
        finally:
            self._busy = False

    async def _run(self, api_key: str, reference: ImageFile, group: list[ImageFile]) -> MatchResult:
        encoded_reference, encoded_group = await asyncio.gather(
            asyncio.to_thread(encode_image, reference),
            encode_all(group),
        )
        client = self._client_factory(api_key)
        logger.info(MSG_SUBMITTING, len(group), type(client).__name__)

        start = time.time()
        try:
            raw = await client.compare(MATCH_PROMPT, encoded_reference, encoded_group)
        except Exception as exc:
            logger.exception(MSG_ORACLE_FAILED)
            return MatchResult(raw_output="", indices=(), group_count=len(group), error=str(exc))
        logger.info(MSG_ORACLE_DONE, time.time() - start)

        indices = extract_match_indices(raw, len(group))
        logger.info(MSG_NORMALIZED, indices)
        return MatchResult(raw_output=raw or "", indices=tuple(indices), group_count=len(group))
