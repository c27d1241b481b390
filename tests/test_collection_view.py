"""Tests for collection filtering and sorting."""

import datetime
import random

import pytest

from shelfpicker.models.game import Game, PlayerRange, PlaytimeRange, Rating
from shelfpicker.services.collection_view import (
    DEFAULT_DIRECTIONS,
    FilterState,
    SortDirection,
    SortOption,
    available_categories,
    filter_games,
    pick_another,
    sort_games,
)


def _game(
    game_id: str,
    name: str,
    *,
    collection_id: str | None = None,
    players: tuple[int, int] = (2, 4),
    playtime: tuple[int, int] = (30, 60),
    average: float = 7.0,
    user_rating: float | None = None,
    year: int | None = 2020,
    weight: float | None = None,
    plays: int = 0,
    last_played: datetime.date | None = None,
    categories: tuple[str, ...] = (),
) -> Game:
    return Game(
        id=game_id,
        collection_id=collection_id or game_id,
        name=name,
        year_published=year,
        players=PlayerRange(*players),
        playtime=PlaytimeRange(*playtime),
        rating=Rating(average=average),
        user_rating=user_rating,
        weight=weight,
        play_count=plays,
        last_played=last_played,
        categories=categories,
    )


@pytest.fixture
def shelf() -> list[Game]:
    return [
        _game(
            "1",
            "Azul",
            players=(2, 4),
            playtime=(30, 45),
            average=7.8,
            user_rating=8.0,
            year=2017,
            weight=1.8,
            plays=6,
            last_played=datetime.date(2024, 6, 20),
            categories=("Abstract Strategy", "Puzzle"),
        ),
        _game(
            "2",
            "gloomhaven",
            players=(1, 4),
            playtime=(60, 120),
            average=8.6,
            year=2017,
            weight=3.9,
            plays=1,
            categories=("Adventure",),
        ),
        _game(
            "3",
            "Codenames",
            players=(2, 8),
            playtime=(15, 15),
            average=7.6,
            user_rating=7.0,
            year=2015,
            weight=1.3,
            plays=6,
            last_played=datetime.date(2024, 1, 5),
            categories=("Party Game",),
        ),
        _game("4", "Brass", players=(2, 4), playtime=(60, 120), average=8.7, year=None),
    ]


def _names(games: list[Game]) -> list[str]:
    return [g.name for g in games]


class TestFilterGames:
    def test_no_filters_keeps_all(self, shelf: list[Game]) -> None:
        assert filter_games(shelf, FilterState()) == shelf

    def test_player_count_is_inclusive(self, shelf: list[Game]) -> None:
        assert _names(filter_games(shelf, FilterState(player_count=1))) == ["gloomhaven"]
        assert _names(filter_games(shelf, FilterState(player_count=8))) == ["Codenames"]

    def test_min_playtime_uses_longest(self, shelf: list[Game]) -> None:
        result = filter_games(shelf, FilterState(min_playtime=60))

        assert _names(result) == ["gloomhaven", "Brass"]

    def test_max_playtime_uses_shortest(self, shelf: list[Game]) -> None:
        result = filter_games(shelf, FilterState(max_playtime=30))

        assert _names(result) == ["Azul", "Codenames"]

    def test_category(self, shelf: list[Game]) -> None:
        result = filter_games(shelf, FilterState(category="Puzzle"))

        assert _names(result) == ["Azul"]

    def test_search_is_case_insensitive(self, shelf: list[Game]) -> None:
        assert _names(filter_games(shelf, FilterState(search_query="GLOOM"))) == ["gloomhaven"]

    def test_filters_combine(self, shelf: list[Game]) -> None:
        result = filter_games(shelf, FilterState(player_count=2, max_playtime=45, search_query="a"))

        assert _names(result) == ["Azul", "Codenames"]


class TestSortGames:
    def test_default_directions(self) -> None:
        assert DEFAULT_DIRECTIONS[SortOption.NAME] == SortDirection.ASC
        assert DEFAULT_DIRECTIONS[SortOption.COMPLEXITY] == SortDirection.ASC
        assert DEFAULT_DIRECTIONS[SortOption.RATING] == SortDirection.DESC
        assert DEFAULT_DIRECTIONS[SortOption.PLAYS] == SortDirection.DESC

    def test_rating_desc_by_default(self, shelf: list[Game]) -> None:
        result = sort_games(shelf, SortOption.RATING)

        assert _names(result) == ["Brass", "gloomhaven", "Azul", "Codenames"]

    def test_name_ignores_case(self, shelf: list[Game]) -> None:
        result = sort_games(shelf, SortOption.NAME)

        assert _names(result) == ["Azul", "Brass", "Codenames", "gloomhaven"]

    def test_explicit_direction(self, shelf: list[Game]) -> None:
        result = sort_games(shelf, SortOption.NAME, SortDirection.DESC)

        assert _names(result) == ["gloomhaven", "Codenames", "Brass", "Azul"]

    def test_complexity_treats_missing_as_zero(self, shelf: list[Game]) -> None:
        result = sort_games(shelf, SortOption.COMPLEXITY)

        assert _names(result) == ["Brass", "Codenames", "Azul", "gloomhaven"]

    def test_user_rating(self, shelf: list[Game]) -> None:
        result = sort_games(shelf, SortOption.USER_RATING)

        assert _names(result)[:2] == ["Azul", "Codenames"]

    def test_year_missing_sorts_as_zero(self, shelf: list[Game]) -> None:
        result = sort_games(shelf, SortOption.YEAR)

        assert _names(result)[-1] == "Brass"

    def test_plays_ties_break_on_last_played(self, shelf: list[Game]) -> None:
        result = sort_games(shelf, SortOption.PLAYS)

        assert _names(result) == ["Azul", "Codenames", "gloomhaven", "Brass"]

    def test_plays_ascending(self, shelf: list[Game]) -> None:
        result = sort_games(shelf, SortOption.PLAYS, SortDirection.ASC)

        assert _names(result) == ["Brass", "gloomhaven", "Codenames", "Azul"]

    def test_last_played_never_played_last(self, shelf: list[Game]) -> None:
        result = sort_games(shelf, SortOption.LAST_PLAYED)

        assert _names(result)[:2] == ["Azul", "Codenames"]
        assert set(_names(result)[2:]) == {"gloomhaven", "Brass"}

    def test_last_played_ascending_never_played_first(self, shelf: list[Game]) -> None:
        result = sort_games(shelf, SortOption.LAST_PLAYED, SortDirection.ASC)

        assert _names(result)[2:] == ["Codenames", "Azul"]

    def test_random_is_stable_per_seed(self, shelf: list[Game]) -> None:
        first = sort_games(shelf, SortOption.RANDOM, seed=11)
        again = sort_games(list(reversed(shelf)), SortOption.RANDOM, seed=11)

        assert first == again
        assert sorted(_names(first)) == sorted(_names(shelf))

    def test_random_keeps_copies_together(self) -> None:
        games = [
            _game("9", "Copy", collection_id="b"),
            _game("5", "Other"),
            _game("9", "Copy", collection_id="a"),
        ]

        result = sort_games(games, SortOption.RANDOM, seed=3)

        copies = [i for i, g in enumerate(result) if g.id == "9"]
        assert copies[1] - copies[0] == 1
        assert [result[i].collection_id for i in copies] == ["a", "b"]

    def test_does_not_mutate_input(self, shelf: list[Game]) -> None:
        before = list(shelf)
        sort_games(shelf, SortOption.NAME)

        assert shelf == before


class TestAvailableCategories:
    def test_sorted_unique(self, shelf: list[Game]) -> None:
        assert available_categories(shelf + shelf) == [
            "Abstract Strategy",
            "Adventure",
            "Party Game",
            "Puzzle",
        ]


class TestPickAnother:
    def test_excludes_previous(self, shelf: list[Game]) -> None:
        rng = random.Random(1)

        picks = {pick_another(shelf, shelf[0], rng).collection_id for _ in range(200)}

        assert shelf[0].collection_id not in picks

    def test_single_game_may_repeat(self, shelf: list[Game]) -> None:
        assert pick_another(shelf[:1], shelf[0]) == shelf[0]

    def test_without_previous(self, shelf: list[Game]) -> None:
        assert pick_another(shelf, None, random.Random(0)) in shelf

    def test_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            pick_another([])
