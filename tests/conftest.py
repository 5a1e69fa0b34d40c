import os

import pytest
from bs4 import BeautifulSoup

from converter.extractor import html_to_markdown


@pytest.fixture
def md():
    """Parse an HTML snippet and convert it with the given options."""

    def convert(html, oracle_class=None, **options):
        soup = BeautifulSoup(html, "html.parser")
        if oracle_class is None:
            return html_to_markdown(soup, options)
        return html_to_markdown(soup, options, oracle_class)

    return convert


@pytest.fixture
def clean_env(monkeypatch):
    """Drop DEBA_* variables inherited from the shell or a .env file."""
    for key in list(os.environ):
        if key.startswith("DEBA_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
