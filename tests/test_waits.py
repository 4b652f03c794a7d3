"""Tests for waits.py: stabilization predicates fed one page render per poll."""

from bs4 import BeautifulSoup

from league_scraper.waits import count_stabilized, find_season_select, option_count_stabilized


def rows(*teams):
    cells = "".join(f'<div class="row"><span class="team">{t}</span></div>' for t in teams)
    return BeautifulSoup(f"<div>{cells}</div>", "html.parser")


def season_select(*labels):
    options = "".join(f'<option value="/s/{i}/">{label}</option>' for i, label in enumerate(labels))
    return BeautifulSoup(f"<select>{options}</select>", "html.parser")


def team_ready(row):
    return bool(row.select_one(".team").get_text(strip=True))


def poll(predicate, renders):
    return [predicate(soup) for soup in renders]


class TestCountStabilized:

    def test_growing_count_is_not_stable(self):
        predicate = count_stabilized(".row")
        assert poll(predicate, [rows("A"), rows("A", "B"), rows("A", "B", "C")]) == [False, False, False]

    def test_same_count_on_consecutive_polls_is_stable(self):
        predicate = count_stabilized(".row")
        assert poll(predicate, [rows("A"), rows("A", "B"), rows("A", "B")]) == [False, False, True]

    def test_zero_rows_never_pass(self):
        predicate = count_stabilized(".row")
        assert poll(predicate, [rows(), rows(), rows()]) == [False, False, False]

    def test_rows_must_be_ready(self):
        predicate = count_stabilized(".row", team_ready)
        renders = [rows("A", ""), rows("A", ""), rows("A", "B")]
        assert poll(predicate, renders) == [False, False, True]

    def test_shrinking_then_steady(self):
        predicate = count_stabilized(".row")
        assert poll(predicate, [rows("A", "B"), rows("A"), rows("A")]) == [False, False, True]

    def test_predicates_do_not_share_state(self):
        first = count_stabilized(".row")
        second = count_stabilized(".row")

        first(rows("A", "B"))
        assert first(rows("A", "B"))
        # a fresh predicate has no previous count yet
        assert not second(rows("A", "B"))


class TestOptionCountStabilized:

    def test_waits_for_option_list_to_settle(self):
        predicate = option_count_stabilized()
        renders = [
            season_select("2023/2024"),
            season_select("2023/2024", "2022/2023"),
            season_select("2023/2024", "2022/2023"),
        ]
        assert poll(predicate, renders) == [False, False, True]

    def test_missing_season_select_never_passes(self):
        predicate = option_count_stabilized()
        renders = [season_select("Soccer"), season_select("Soccer")]
        assert poll(predicate, renders) == [False, False]

    def test_predicates_do_not_share_state(self):
        first = option_count_stabilized()
        second = option_count_stabilized()
        page = season_select("2023/2024")

        first(page)
        assert first(page)
        assert not second(page)


def test_find_season_select_prefers_last_matching_select():
    html = (
        '<select id="a"><option>2022/2023</option></select>'
        '<select id="b"><option>2021/2022</option></select>'
        '<select id="c"><option>Gameweek 1</option></select>'
    )
    assert find_season_select(BeautifulSoup(html, "html.parser"))["id"] == "b"
