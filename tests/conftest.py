import pytest

from backend.models import Article


@pytest.fixture
def corpus():
    return [
        Article(id="a1", title="Mice in microgravity", text="Mice show bone loss in microgravity."),
        Article(id="a2", title="Plant roots", text="Roots bend toward gravity; gravity sensing in roots.",
                url="https://example.org/roots"),
        Article(id="a3", title="Radiation", text="Cosmic radiation damages DNA."),
    ]
