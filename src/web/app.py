"""
Streamlit page for Photo Matcher.
Run by `photo-matcher` or `streamlit run src/web/app.py`.
"""
import asyncio
import logging

import streamlit as st

from src.config import Config
from src.constants import (
    APP_TITLE,
    GRID_COLUMNS,
    IMAGE_TYPES,
    KEY_BUSY,
    KEY_COMPARE,
    KEY_ERROR,
    KEY_MATCHER,
    KEY_RESULT,
    KEY_SUBMISSION,
    LABEL_API_KEY,
    LABEL_COMPARE,
    LABEL_COMPARING,
    LABEL_GROUP,
    LABEL_MODEL_OUTPUT,
    LABEL_PROVIDER,
    LABEL_REFERENCE,
    PROVIDERS,
)
from src.encoder import ImageFile
from src.main import setup_logging
from src.matcher import MatcherBusyError, MatchResult, MissingInputError, PhotoMatcher
from src.vision.factory import build_client
from src.web.view import describe_result, format_indices, image_cards

logger = logging.getLogger(__name__)


@st.cache_resource
def _load_config() -> Config:
    config = Config.from_env()
    setup_logging(config.log_level)
    return config


def _to_image_file(upload) -> ImageFile:
    return ImageFile(name=upload.name, data=upload.getvalue(), mime_type=upload.type)


def _matcher(config: Config, provider: str) -> PhotoMatcher:
    """One matcher per browser session, rebuilt when the provider changes."""
    match st.session_state.get(KEY_MATCHER):
        case (p, matcher) if p == provider:
            return matcher
        case _:
            matcher = PhotoMatcher(lambda key: build_client(provider, key, config))
            st.session_state[KEY_MATCHER] = (provider, matcher)
            return matcher


def _render_result(result: MatchResult, reference: ImageFile | None, group: list[ImageFile]) -> None:
    if reference is not None:
        st.subheader(LABEL_REFERENCE)
        st.image(reference.data, width="stretch")

    st.subheader(LABEL_MODEL_OUTPUT)
    st.code(result.raw_output or "", language="json")
    st.caption(format_indices(result.indices))
    match result.error:
        case None:
            st.info(describe_result(result))
        case _:
            st.warning(describe_result(result))

    if not group:
        return
    st.subheader(LABEL_GROUP)
    columns = st.columns(GRID_COLUMNS)
    for position, card in enumerate(image_cards(result, group)):
        with columns[position % GRID_COLUMNS]:
            st.markdown(card, unsafe_allow_html=True)


def _run_submission(matcher: PhotoMatcher, api_key: str) -> None:
    """Second pass after a click: the button is already drawn disabled."""
    reference, group = st.session_state.get(KEY_SUBMISSION) or (None, [])
    try:
        with st.spinner(LABEL_COMPARING):
            st.session_state[KEY_RESULT] = asyncio.run(matcher.submit(api_key, reference, group))
    except (MissingInputError, MatcherBusyError) as exc:
        st.session_state[KEY_ERROR] = str(exc)
        st.session_state[KEY_SUBMISSION] = None
    finally:
        st.session_state[KEY_BUSY] = False


def main() -> None:
    st.set_page_config(page_title=APP_TITLE, layout="centered")
    st.title(APP_TITLE)

    config = _load_config()
    provider = st.selectbox(LABEL_PROVIDER, PROVIDERS, index=PROVIDERS.index(config.provider))
    api_key = st.text_input(LABEL_API_KEY, value=config.default_api_key(provider), type="password")
    reference = st.file_uploader(LABEL_REFERENCE, type=IMAGE_TYPES)
    group = st.file_uploader(LABEL_GROUP, type=IMAGE_TYPES, accept_multiple_files=True) or []

    matcher = _matcher(config, provider)
    busy = st.session_state.get(KEY_BUSY, False)
    label = LABEL_COMPARING if busy else LABEL_COMPARE
    if st.button(label, disabled=busy, key=KEY_COMPARE, width="stretch", type="primary"):
        # Markers are drawn against this snapshot, not the live uploaders.
        st.session_state[KEY_SUBMISSION] = (
            _to_image_file(reference) if reference is not None else None,
            list(map(_to_image_file, group)),
        )
        st.session_state[KEY_RESULT] = None
        st.session_state[KEY_ERROR] = None
        st.session_state[KEY_BUSY] = True
        st.rerun()

    if busy:
        _run_submission(matcher, api_key)
        st.rerun()

    match st.session_state.get(KEY_ERROR):
        case str() as err if err:
            st.error(err)
        case _:
            pass

    result = st.session_state.get(KEY_RESULT)
    submission = st.session_state.get(KEY_SUBMISSION)
    if result is not None and submission is not None:
        submitted_reference, submitted_group = submission
        _render_result(result, submitted_reference, submitted_group)


main()
