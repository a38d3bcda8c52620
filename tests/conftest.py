from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest


def _response(parsed=None, texts=()):
    content = [SimpleNamespace(type="output_text", text=t) for t in texts]
    return SimpleNamespace(
        output_parsed=parsed,
        output=[SimpleNamespace(type="message", content=content)] if content else [],
    )


@pytest.fixture
def response_factory():
    return _response


@pytest.fixture
def fake_client_factory():
    """OpenAI-shaped mock whose responses.create returns (or raises) the given value."""

    def _make(response=None, error=None):
        client = MagicMock()
        if error is not None:
            client.responses.create.side_effect = error
        else:
            client.responses.create.return_value = response
        return client

    return _make
