"""Tests for roster table detection."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from senate_roster.errors import TableNotFoundError
from senate_roster.locator import (
    TableStrategy,
    find_by_full_text,
    find_by_header_keywords,
    has_roster_headers,
    locate_roster_table,
)


def _soup(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


class TestFindByHeaderKeywords:
    def test_skips_decoy_and_finds_roster(self, sample_page: str) -> None:
        table = find_by_header_keywords(_soup(sample_page))
        assert table is not None
        assert table["id"] == "senators"

    def test_first_qualifying_table_wins(self, make_page, make_table, make_row) -> None:
        rows = [make_row("Ohio", "Sherrod Brown", "Democratic", "January 3, 2007")]
        markup = make_page(
            make_table(rows, table_id="first"),
            make_table(rows, table_id="second"),
        )
        assert find_by_header_keywords(_soup(markup))["id"] == "first"

    def test_requires_marker_classes(self, make_page, make_table, make_row) -> None:
        rows = [make_row("Ohio", "Sherrod Brown", "Democratic", "January 3, 2007")]
        markup = make_page(make_table(rows, marker="wikitable"))
        assert find_by_header_keywords(_soup(markup)) is None

    def test_custom_marker(self, make_page, make_table, make_row) -> None:
        rows = [make_row("Ohio", "Sherrod Brown", "Democratic", "January 3, 2007")]
        markup = make_page(make_table(rows, marker="roster-table"))
        assert find_by_header_keywords(_soup(markup), marker="roster-table") is not None

    @pytest.mark.parametrize("tenure_header", ["Assumed office", "Senator since", "Term"])
    def test_tenure_header_variants(self, tenure_header, make_page, make_table) -> None:
        markup = make_page(make_table([], headers=["Name", "State", tenure_header]))
        assert find_by_header_keywords(_soup(markup)) is not None

    def test_missing_state_header(self, make_page, make_table) -> None:
        markup = make_page(make_table([], headers=["Senator", "Party", "Assumed office"]))
        assert find_by_header_keywords(_soup(markup)) is None


class TestHasRosterHeaders:
    def test_table_without_headers(self) -> None:
        table = _soup("<table><tr><td>a</td></tr></table>").find("table")
        assert has_roster_headers(table) is False


class TestFindByFullText:
    def test_unmarked_table_with_tokens(self) -> None:
        markup = (
            "<table id='plain'><tr><td>Senator</td><td>State</td><td>Party</td></tr></table>"
        )
        assert find_by_full_text(_soup(markup))["id"] == "plain"

    def test_tokens_are_case_sensitive(self) -> None:
        markup = "<table><tr><td>senator</td><td>state</td><td>party</td></tr></table>"
        assert find_by_full_text(_soup(markup)) is None

    def test_takes_first_match(self) -> None:
        markup = (
            "<table id='a'><tr><td>Senator State Party</td></tr></table>"
            "<table id='b'><tr><td>Senator State Party</td></tr></table>"
        )
        assert find_by_full_text(_soup(markup))["id"] == "a"


class TestLocateRosterTable:
    def test_reports_winning_strategy(self, sample_page: str) -> None:
        table, strategy = locate_roster_table(_soup(sample_page))
        assert table["id"] == "senators"
        assert strategy == "header_keywords"

    def test_falls_back_to_full_text(self) -> None:
        markup = (
            "<table class='infobox'><tr><th>Senator</th><th>State</th><th>Party</th></tr>"
            "<tr><td>Jane Doe</td><td>Ohio</td><td>D</td></tr></table>"
        )
        table, strategy = locate_roster_table(_soup(markup))
        assert strategy == "full_text"
        assert table.find("td").get_text() == "Jane Doe"

    def test_no_table_raises(self) -> None:
        with pytest.raises(TableNotFoundError) as excinfo:
            locate_roster_table(_soup("<p>No tables here</p>"))
        assert excinfo.value.strategies == ["header_keywords", "full_text"]

    def test_custom_strategy_chain_order(self, sample_page: str) -> None:
        calls: list[str] = []

        def _never(soup):
            calls.append("never")
            return None

        def _first_table(soup):
            calls.append("first")
            return soup.find("table")

        table, strategy = locate_roster_table(
            _soup(sample_page),
            [TableStrategy("never", _never), TableStrategy("first", _first_table)],
        )
        assert calls == ["never", "first"]
        assert strategy == "first"
        assert table["id"] == "changes"
