"""Streamlit page flow, driven headless through AppTest."""
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from src.constants import KEY_BUSY, KEY_RESULT, LABEL_COMPARE, MSG_MISSING_INPUT

APP_PATH = Path(__file__).resolve().parents[1] / "src" / "web" / "app.py"


@pytest.fixture(autouse=True)
def no_env(monkeypatch):
    monkeypatch.setattr("src.config.load_dotenv", lambda **_: None)
    for name in ("MATCH_PROVIDER", "OPENAI_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)


def test_page_starts_ready():
    at = AppTest.from_file(str(APP_PATH), default_timeout=30).run()

    assert not at.exception
    assert at.button[0].label == LABEL_COMPARE
    assert not at.button[0].disabled


def test_compare_without_inputs_reports_and_returns_ready():
    at = AppTest.from_file(str(APP_PATH), default_timeout=30).run()

    at.button[0].click().run()

    assert not at.exception
    assert at.error[0].value == MSG_MISSING_INPUT
    assert at.session_state[KEY_BUSY] is False
    assert at.session_state[KEY_RESULT] is None
    assert at.button[0].label == LABEL_COMPARE
    assert not at.button[0].disabled
