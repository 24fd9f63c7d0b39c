"""Tests for descriptor queries and first-match chain narrowing."""

import pytest
from bs4 import BeautifulSoup

from catalog_scraper.selector import (
    compile_query,
    element_children,
    first_text,
    select,
    select_chain,
    select_first,
)


NESTED = """<html><body>
  <div class="box" id="first">
    <p class="note">one</p>
  </div>
  <div class="box" id="second">
    <p class="note">two</p>
    <span class="note">three</span>
    <div><p class="note">four</p></div>
  </div>
</body></html>
"""


@pytest.fixture
def soup():
    return BeautifulSoup(NESTED, "lxml")


class TestCompileQuery:
    def test_simple_descriptors(self):
        assert compile_query("h2") == "h2"
        assert compile_query("#bigpic") == "#bigpic"
        assert compile_query(".feature_name") == ".feature_name"

    def test_class_and_tag_are_merged_into_one_compound(self):
        assert compile_query(".note p") == "p.note"
        assert compile_query("div#second .box") == "div#second.box"

    def test_rejects_unsupported_syntax(self):
        with pytest.raises(ValueError):
            compile_query("div > p")
        with pytest.raises(ValueError):
            compile_query("a[href]")
        with pytest.raises(ValueError):
            compile_query("   ")


class TestSelect:
    def test_matches_in_document_order(self, soup):
        texts = [node.get_text() for node in select(soup, ".note")]
        assert texts == ["one", "two", "three", "four"]

    def test_class_tag_compound_filters_by_both(self, soup):
        texts = [node.get_text() for node in select(soup, ".note span")]
        assert texts == ["three"]

    def test_root_is_not_its_own_match(self, soup):
        second = select_first(soup, "#second")
        assert select(second, "#second") == []

    def test_no_match_returns_empty_list(self, soup):
        assert select(soup, "#missing") == []
        assert select_first(soup, "#missing") is None


class TestSelectChain:
    def test_narrows_through_first_match(self, soup):
        # ".box" matches both boxes, only the first one is searched for ".note"
        texts = [node.get_text() for node in select_chain(soup, [".box", ".note"])]
        assert texts == ["one"]

    def test_siblings_of_first_match_are_discarded(self, soup):
        # the span lives in the second box, so narrowing via the first box misses it
        assert select_chain(soup, [".box", "span"]) == []

    def test_returns_all_matches_of_last_step(self, soup):
        texts = [node.get_text() for node in select_chain(soup, ["#second", "p"])]
        assert texts == ["two", "four"]

    def test_fails_without_running_later_steps(self, soup):
        assert select_chain(soup, ["#missing", "p"]) == []

    def test_empty_chain_is_an_error(self, soup):
        with pytest.raises(ValueError):
            select_chain(soup, [])


class TestTextHelpers:
    def test_first_text_of_text_child(self):
        node = BeautifulSoup("<p>hello <b>world</b></p>", "lxml").p
        assert first_text(node) == "hello "

    def test_first_text_when_first_child_is_element(self):
        node = BeautifulSoup("<p><b>world</b></p>", "lxml").p
        assert first_text(node) == ""

    def test_first_text_ignores_comments(self):
        node = BeautifulSoup("<p><!-- note -->text</p>", "lxml").p
        assert first_text(node) == ""

    def test_first_text_of_missing_or_empty_node(self):
        assert first_text(None) == ""
        assert first_text(BeautifulSoup("<p></p>", "lxml").p) == ""

    def test_element_children_skip_text(self):
        node = BeautifulSoup("<ul>\n <li>a</li>\n <li>b</li>\n</ul>", "lxml").ul
        assert [li.get_text() for li in element_children(node)] == ["a", "b"]
