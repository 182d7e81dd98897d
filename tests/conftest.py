"""
Pytest fixtures for answer text tests.
"""

import pytest

from answer_text import AnswerTextConfig, AnswerTextService, MessageCatalog, Reference


@pytest.fixture
def references():
    """Three references: an http link, no URL, and a non-http URL."""
    return [
        Reference(
            exact_quote="Paris is the capital of France",
            url="https://www.example.com/paris",
        ),
        Reference(exact_quote="France has 68 million inhabitants"),
        Reference(
            exact_quote="The Eiffel Tower opened in 1889",
            url="ftp://files.example.org/eiffel",
        ),
    ]


@pytest.fixture
def reference_block():
    """Expected reference block for the ``references`` fixture."""
    return (
        "[^1]: Paris is the capital of France [example.com](https://www.example.com/paris)"
        "\n\n"
        "[^2]: France has 68 million inhabitants"
        "\n\n"
        "[^3]: The Eiffel Tower opened in 1889"
    )


@pytest.fixture
def catalog_messages():
    return {
        "en": {
            "greet": "Hello ${name}!",
            "bye": "Goodbye",
            "twice": "${x} and ${x}",
        },
        "de": {
            "greet": "Hallo ${name}!",
            "empty": "",
        },
    }


@pytest.fixture
def catalog(catalog_messages):
    return MessageCatalog(catalog_messages)


@pytest.fixture
def service():
    """Service on the packaged catalog, independent of the environment."""
    return AnswerTextService(config=AnswerTextConfig())
