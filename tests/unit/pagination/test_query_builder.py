"""
Tests for QueryFragment and QueryBuilder.

Tests predicate composition, parameter binding, sort whitelisting and the
count/window derivations used by the pagination strategy.
"""

from datetime import date

import pytest

from worldcup_api.exceptions import BindingError
from worldcup_api.repositories.resources import (
    MATCH_PLAYERS,
    PLAYER_GOALS,
    PLAYERS,
    STADIUMS,
    TOURNAMENTS,
)
from worldcup_api.storage.executor import find_placeholders
from worldcup_api.storage.pagination.query_builder import (
    QueryBuilder,
    QueryFragment,
)


class TestQueryFragment:
    """Test QueryFragment composition."""

    def test_where_appends_and_binds(self):
        fragment = QueryFragment("SELECT * FROM teams WHERE 1 = 1")
        fragment.where("region_name LIKE :region", region="%Europe%")

        assert fragment.sql == (
            "SELECT * FROM teams WHERE 1 = 1 AND region_name LIKE :region"
        )
        assert fragment.params == {"region": "%Europe%"}

    def test_duplicate_parameter_raises(self):
        fragment = QueryFragment("SELECT * FROM teams WHERE 1 = 1")
        fragment.where("team_id = :team_id", team_id="T-01")

        with pytest.raises(BindingError):
            fragment.where("team_id <> :team_id", team_id="T-02")

    def test_order_by_follows_predicates(self):
        fragment = QueryFragment("SELECT * FROM teams WHERE 1 = 1")
        fragment.order_by("team_id", "ASC")
        fragment.where("region_name LIKE :region", region="%a%")

        assert fragment.statement.endswith("ORDER BY team_id ASC")
        assert "AND region_name LIKE :region ORDER BY" in fragment.statement

    def test_order_by_tie_breaker_follows_direction(self):
        fragment = QueryFragment("SELECT * FROM players WHERE 1 = 1")
        fragment.order_by("birth_date", "DESC", tie_breaker="player_id")

        assert fragment.statement.endswith(
            "ORDER BY birth_date DESC, player_id DESC"
        )

    def test_tie_breaker_equal_to_sort_column_is_skipped(self):
        fragment = QueryFragment("SELECT * FROM teams WHERE 1 = 1")
        fragment.order_by("team_id", "ASC", tie_breaker="team_id")

        assert fragment.statement.endswith("ORDER BY team_id ASC")

    def test_counted_wraps_without_order(self):
        fragment = QueryFragment("SELECT * FROM teams WHERE 1 = 1", {"x": 1})
        fragment.order_by("team_id", "DESC")

        counted = fragment.counted()

        assert counted.statement == (
            "SELECT COUNT(*) FROM (SELECT * FROM teams WHERE 1 = 1) "
            "AS filtered_rows"
        )
        assert counted.params == {"x": 1}

    def test_windowed_appends_limit_offset_last(self):
        fragment = QueryFragment("SELECT * FROM teams WHERE 1 = 1")
        fragment.order_by("team_id", "ASC")

        windowed = fragment.windowed(limit=5, offset=10)

        assert windowed.statement.endswith(
            "ORDER BY team_id ASC LIMIT :page_limit OFFSET :page_offset"
        )
        assert windowed.params == {"page_limit": 5, "page_offset": 10}
        # Original fragment is untouched
        assert fragment.params == {}
        assert "LIMIT" not in fragment.statement

    def test_windowed_rejects_reserved_names(self):
        fragment = QueryFragment(
            "SELECT * FROM teams WHERE 1 = 1", {"page_limit": 3}
        )

        with pytest.raises(BindingError):
            fragment.windowed(limit=5, offset=0)


class TestQueryBuilder:
    """Test statement construction from declarative resources."""

    def test_no_filters_uses_default_sort(self):
        fragment = QueryBuilder(PLAYERS).build({})

        assert fragment.statement == (
            "SELECT * FROM players WHERE 1 = 1 "
            "ORDER BY family_name ASC, player_id ASC"
        )
        assert fragment.params == {}

    def test_prefix_wildcard_is_in_value_not_sql(self):
        fragment = QueryBuilder(PLAYERS).build({"last_name": "Mes"})

        assert "family_name LIKE :last_name" in fragment.sql
        assert "%" not in fragment.sql
        assert fragment.params == {"last_name": "Mes%"}

    def test_substring_wildcards(self):
        fragment = QueryBuilder(TOURNAMENTS).build({"host_country": "ran"})

        assert fragment.params == {"host_country": "%ran%"}

    def test_predicates_follow_declared_rule_order(self):
        values = {"dob": date(1990, 1, 1), "first_name": "Ly"}

        fragment = QueryBuilder(PLAYERS).build(values)

        first = fragment.sql.index("given_name LIKE :first_name")
        second = fragment.sql.index("birth_date > :dob")
        assert first < second

    def test_identical_inputs_build_identical_sql(self):
        a = QueryBuilder(PLAYERS).build({"first_name": "A", "last_name": "B"})
        b = QueryBuilder(PLAYERS).build({"last_name": "B", "first_name": "A"})

        assert a.statement == b.statement
        assert a.params == b.params

    def test_min_and_max_date_range(self):
        values = {
            "start_date_min": date(1990, 1, 1),
            "start_date_max": date(2010, 12, 31),
        }

        fragment = QueryBuilder(TOURNAMENTS).build(values)

        assert "start_date >= :start_date_min" in fragment.sql
        assert "start_date <= :start_date_max" in fragment.sql
        assert fragment.params == values

    @pytest.mark.parametrize(
        "position, column",
        [
            ("goalkeeper", "goal_keeper"),
            ("defender", "defender"),
            ("midfielder", "midfielder"),
            ("forward", "forward"),
        ],
    )
    def test_position_selects_exactly_one_column(self, position, column):
        fragment = QueryBuilder(PLAYERS).build({"position": position})

        assert f"AND {column} = :position" in fragment.sql
        assert fragment.sql.count(" = :position") == 1
        assert fragment.params == {"position": 1}

    def test_scope_predicate_comes_first(self):
        fragment = QueryBuilder(PLAYER_GOALS).build(
            {"tournament": "WC-2022"}, scope_id="P-00001"
        )

        assert fragment.sql == (
            "SELECT * FROM goals WHERE 1 = 1 AND player_id = :player_id "
            "AND tournament_id = :tournament"
        )
        assert fragment.params == {
            "player_id": "P-00001",
            "tournament": "WC-2022",
        }

    def test_scoped_resource_requires_scope_id(self):
        with pytest.raises(BindingError):
            QueryBuilder(PLAYER_GOALS).build({})

    def test_joined_resource_uses_qualified_columns(self):
        fragment = QueryBuilder(MATCH_PLAYERS).build(
            {"position": "goalkeeper"}, scope_id="M-2022-64"
        )

        assert "pa.match_id = :match_id" in fragment.sql
        assert "p.goal_keeper = :position" in fragment.sql
        assert fragment.statement.endswith(
            "ORDER BY p.family_name ASC, p.player_id ASC"
        )

    def test_client_sort_keeps_tie_breaker(self):
        fragment = QueryBuilder(TOURNAMENTS).build(
            {}, sort_by="tournament_name", sort_order="desc"
        )

        assert fragment.statement.endswith(
            "ORDER BY tournament_name DESC, tournament_id DESC"
        )

    def test_every_placeholder_has_a_parameter(self):
        fragment = QueryBuilder(STADIUMS).build(
            {"country": "France", "city": "Paris", "capacity": 1000},
            sort_by="capacity",
            sort_order="desc",
        )
        windowed = fragment.windowed(5, 0)

        assert find_placeholders(windowed.statement) == set(windowed.params)


class TestResolveSort:
    """Test sort whitelisting and direction fallback."""

    def test_known_sort_key_is_translated(self):
        assert QueryBuilder(PLAYERS).resolve_sort("dob", "desc") == (
            "birth_date",
            "DESC",
        )

    def test_unknown_sort_key_falls_back_silently(self):
        builder = QueryBuilder(PLAYERS)

        assert builder.resolve_sort("password; DROP TABLE players", None) == (
            "family_name",
            "ASC",
        )

    @pytest.mark.parametrize("order", [None, "", "sideways", "ASC; --"])
    def test_invalid_direction_falls_back_to_asc(self, order):
        assert QueryBuilder(STADIUMS).resolve_sort("name", order) == (
            "s.stadium_name",
            "ASC",
        )

    def test_direction_is_trimmed_and_upper_cased(self):
        assert QueryBuilder(STADIUMS).resolve_sort("capacity", "  Desc ") == (
            "s.stadium_capacity",
            "DESC",
        )
