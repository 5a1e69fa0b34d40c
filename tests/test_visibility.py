"""Tests for layout-backed hidden-element filtering."""

import pytest
from bs4 import BeautifulSoup

from converter.extractor import html_to_markdown
from converter.visibility import LayoutVisibilityOracle, NullVisibilityOracle, PageBounds

LAYOUT_HTML = """
<html data-layout-scroll="800,300">
<body data-layout-box="800,600,1" data-layout-rect="0,0,800,600" data-layout-scroll="800,600">
<p data-layout-box="800,20,1" data-layout-rect="0,0,800,20">Shown</p>
<p data-layout-box="0,0,0" data-layout-rect="0,0,0,0">Hidden <b>child</b></p>
<p data-layout-box="100,20,1" data-layout-rect="-500,0,-400,20">Offscreen</p>
<p data-layout-box="100,20,1" data-layout-rect="0,900,100,920">Below the page</p>
<p>No geometry</p>
</body>
</html>
"""


class RecordingOracle(LayoutVisibilityOracle):
    instances = []

    def __init__(self, root):
        super().__init__(root)
        self.visited = []
        self.bounds_computed = 0
        RecordingOracle.instances.append(self)

    def _compute_page_bounds(self):
        self.bounds_computed += 1
        return super()._compute_page_bounds()

    def is_visible(self, node):
        self.visited.append(getattr(node, "name", None))
        return super().is_visible(node)


@pytest.fixture
def layout_soup():
    return BeautifulSoup(LAYOUT_HTML, "html.parser")


class TestLayoutVisibilityOracle:
    def test_page_bounds_use_tallest_scroll_extent(self, layout_soup):
        oracle = LayoutVisibilityOracle(layout_soup.html)
        assert oracle.page_bounds() == PageBounds(top=0.0, right=800.0, bottom=600.0, left=0.0)

    def test_zero_extent_is_hidden(self, layout_soup):
        oracle = LayoutVisibilityOracle(layout_soup.html)
        hidden = layout_soup.find_all("p")[1]
        assert not oracle.is_visible(hidden)

    def test_outside_page_is_hidden(self, layout_soup):
        oracle = LayoutVisibilityOracle(layout_soup.html)
        paragraphs = layout_soup.find_all("p")
        assert oracle.is_visible(paragraphs[0])
        assert not oracle.is_visible(paragraphs[2])
        assert not oracle.is_visible(paragraphs[3])

    def test_text_and_unmeasured_nodes_are_visible(self, layout_soup):
        oracle = LayoutVisibilityOracle(layout_soup.html)
        assert oracle.is_visible(layout_soup.find_all("p")[4])
        assert oracle.is_visible(layout_soup.p.string)

    def test_null_oracle(self, layout_soup):
        oracle = NullVisibilityOracle(layout_soup.html)
        assert oracle.page_bounds() is None
        assert oracle.is_visible(layout_soup.find_all("p")[1])


class TestHiddenFiltering:
    def test_hidden_elements_excluded(self, layout_soup):
        result = html_to_markdown(layout_soup, oracle_class=LayoutVisibilityOracle)
        assert result == "Shown\n\nNo geometry"

    def test_hidden_subtree_not_visited(self, layout_soup):
        RecordingOracle.instances.clear()
        html_to_markdown(layout_soup, oracle_class=RecordingOracle)
        (oracle,) = RecordingOracle.instances
        assert "b" not in oracle.visited
        assert oracle.bounds_computed == 1

    def test_include_hidden_skips_oracle(self, layout_soup):
        RecordingOracle.instances.clear()
        result = html_to_markdown(layout_soup, {"exclude_hidden": False}, RecordingOracle)
        assert RecordingOracle.instances == []
        assert "Hidden **child**" in result
        assert "Offscreen" in result

    def test_tree_without_layout_keeps_everything(self, layout_soup):
        result = html_to_markdown(layout_soup)
        assert "Hidden **child**" in result
        assert "Below the page" in result
