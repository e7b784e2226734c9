"""Shared fixtures for hotspot engine tests."""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from hotspot_engine import Element, EngineSettings, Viewport, set_settings


@pytest.fixture(autouse=True)
def reset_settings():
    """Keep the process-wide settings from leaking between tests."""
    set_settings(EngineSettings())
    yield
    set_settings(None)


@pytest.fixture
def viewport():
    return Viewport(width=1200, height=800)


@pytest.fixture
def headline():
    return Element(tag="h1", text="Ship faster", x=100, y=50, width=600, height=80,
                   fontWeight="bold", fontSize=40)


@pytest.fixture
def cta_button():
    return Element(tag="a", text="Start free trial", x=450, y=700, width=150, height=50,
                   className="cta-button")


@pytest.fixture
def configured_settings():
    return EngineSettings(api_key="sk-test-key")


def make_client(content=None, side_effect=None):
    """Fake OpenAI client whose chat completion returns ``content``."""
    client = MagicMock()
    if side_effect is not None:
        client.chat.completions.create.side_effect = side_effect
    else:
        message = SimpleNamespace(content=content)
        client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=message)])
    return client


@pytest.fixture
def client_factory():
    return make_client
