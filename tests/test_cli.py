"""Tests for the command-line entry point."""

import pytest

import cli
from converter.visibility import LayoutVisibilityOracle
from page_loader import LoadedPage


@pytest.fixture
def page_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(
        "<html><head><title>x</title></head><body>"
        '<h1>Title</h1><p>See <a href="other.html">this</a>.</p>'
        '<div class="ad">Buy</div>'
        "</body></html>",
        encoding="utf-8",
    )
    return path


class TestMain:
    def test_prints_markdown_with_trailing_newline(self, page_file, capsys, clean_env):
        cli.main([str(page_file)])
        out = capsys.readouterr().out
        other = page_file.parent.resolve().as_uri() + "/other.html"
        assert out == f"# Title\n\nSee [this]({other}).\n\nBuy\n"

    def test_flags(self, page_file, capsys, clean_env):
        cli.main([str(page_file), "--no-links", "--exclude", ".ad"])
        assert capsys.readouterr().out == "# Title\n\nSee this.\n"

    def test_configured_excludes_are_merged(self, page_file, capsys, clean_env):
        clean_env.setenv("DEBA_EXCLUDE", "h1")
        cli.main([str(page_file), "--exclude", ".ad"])
        assert capsys.readouterr().out.startswith("See [this](")

    def test_load_failure_exits_nonzero(self, tmp_path, capsys, clean_env):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(tmp_path / "missing.html")])
        assert exc_info.value.code == 1
        assert capsys.readouterr().out == ""

    def test_invalid_exclude_selector_exits_nonzero(self, page_file, capsys, clean_env):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(page_file), "--exclude", "p["])
        assert exc_info.value.code == 1
        assert capsys.readouterr().out == ""

    def test_render_uses_layout_oracle(self, monkeypatch, capsys, clean_env):
        from bs4 import BeautifulSoup

        seen = {}

        def fake_load(source, cfg, render=False):
            seen["render"] = render
            soup = BeautifulSoup("<p>x</p>", "html.parser")
            return LoadedPage(soup=soup, url="https://e.com/", rendered=render)

        def fake_convert(page, options, oracle_class):
            seen["oracle_class"] = oracle_class
            return "md"

        monkeypatch.setattr(cli, "load_page", fake_load)
        monkeypatch.setattr(cli, "html_to_markdown", fake_convert)
        cli.main(["https://e.com/", "--render"])
        assert seen == {"render": True, "oracle_class": LayoutVisibilityOracle}
        assert capsys.readouterr().out == "md\n"
