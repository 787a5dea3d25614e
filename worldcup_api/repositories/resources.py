"""
Resources exposed by the API, described as data.

Column names follow the Fjelstul World Cup database. Filters are applied
in the order they are declared here.
"""

from worldcup_api.schemas.resources import (
    FilterRule,
    IdentifierKind,
    LookupConfig,
    MatchKind,
    ResourceConfig,
    ScopeRule,
    ValueKind,
)

POSITIONS = ("goalkeeper", "defender", "midfielder", "forward")


def position_filter(prefix: str = "") -> FilterRule:
    """Position filter selecting exactly one boolean position column."""
    return FilterRule(
        param="position",
        match=MatchKind.FLAG,
        value_kind=ValueKind.CHOICE,
        choices=POSITIONS,
        flag_columns={
            "goalkeeper": f"{prefix}goal_keeper",
            "defender": f"{prefix}defender",
            "midfielder": f"{prefix}midfielder",
            "forward": f"{prefix}forward",
        },
        description="String (goalkeeper, defender, midfielder or forward)",
    )


PLAYERS = ResourceConfig(
    name="players",
    uri="/players",
    description="Gets a list of zero or more players that match the filtering criteria",
    base_sql="SELECT * FROM players WHERE 1 = 1",
    filters=(
        FilterRule(
            param="first_name",
            column="given_name",
            match=MatchKind.PREFIX,
            description="String (starts with)",
        ),
        FilterRule(
            param="last_name",
            column="family_name",
            match=MatchKind.PREFIX,
            description="String (starts with)",
        ),
        FilterRule(
            param="dob",
            column="birth_date",
            match=MatchKind.AFTER,
            value_kind=ValueKind.DATE,
            description="Date YYYY-MM-DD (born after)",
        ),
        position_filter(),
        FilterRule(
            param="gender",
            column="female",
            value_kind=ValueKind.CHOICE,
            choices=("male", "female"),
            value_map={"male": 0, "female": 1},
            description="String (male or female)",
        ),
    ),
    sort_columns={
        "first_name": "given_name",
        "last_name": "family_name",
        "dob": "birth_date",
        "player_id": "player_id",
    },
    default_sort="family_name",
    tie_breaker="player_id",
    not_found_message="No players found for that criteria.",
)

PLAYER_GOALS = ResourceConfig(
    name="player_goals",
    uri="/players/{player_id}/goals",
    description="Gets a list of zero or more goals scored by the specified player",
    base_sql="SELECT * FROM goals WHERE 1 = 1",
    scope=ScopeRule(
        param="player_id", column="player_id", identifier=IdentifierKind.PLAYER
    ),
    filters=(
        FilterRule(
            param="tournament",
            column="tournament_id",
            value_kind=ValueKind.IDENTIFIER,
            identifier=IdentifierKind.TOURNAMENT,
            description="String (WC-YYYY)",
        ),
        FilterRule(
            param="match",
            column="match_id",
            value_kind=ValueKind.IDENTIFIER,
            identifier=IdentifierKind.MATCH,
            description="String (M-YYYY-MM)",
        ),
    ),
    default_sort="key_id",
    tie_breaker="key_id",
    not_found_message="No goals found for player ID: {scope_id} or player does not exist.",
)

PLAYER_APPEARANCES = ResourceConfig(
    name="player_appearances",
    uri="/players/{player_id}/appearances",
    description="Gets a list of the specified player's appearances",
    base_sql="SELECT * FROM player_appearances WHERE 1 = 1",
    scope=ScopeRule(
        param="player_id", column="player_id", identifier=IdentifierKind.PLAYER
    ),
    default_sort="key_id",
    tie_breaker="key_id",
    not_found_message="No appearances found for player ID: {scope_id} or player does not exist.",
)

TEAMS = ResourceConfig(
    name="teams",
    uri="/teams",
    description="Gets a list of zero or more teams matching the filtering criteria",
    base_sql="SELECT * FROM teams WHERE 1 = 1",
    filters=(
        FilterRule(
            param="region",
            column="region_name",
            match=MatchKind.SUBSTRING,
            description="String (partial match)",
        ),
    ),
    sort_columns={"team_id": "team_id", "team_name": "team_name"},
    default_sort="team_id",
    tie_breaker="team_id",
    not_found_message="No teams found for that criteria.",
)

TEAM_APPEARANCES = ResourceConfig(
    name="team_appearances",
    uri="/teams/{team_id}/appearances",
    description="Gets a list of zero or more appearances of the specified team",
    base_sql="SELECT * FROM team_appearances WHERE 1 = 1",
    scope=ScopeRule(
        param="team_id", column="team_id", identifier=IdentifierKind.TEAM
    ),
    filters=(
        FilterRule(
            param="match_result",
            column="match_result",
            value_kind=ValueKind.CHOICE,
            choices=("win", "lose", "draw"),
            description="String (win, lose or draw)",
        ),
    ),
    default_sort="key_id",
    tie_breaker="key_id",
    not_found_message="No appearances found for team ID: {scope_id} or team does not exist.",
)

TOURNAMENTS = ResourceConfig(
    name="tournaments",
    uri="/tournaments",
    description="Gets a list of zero or more World Cup tournaments",
    base_sql="SELECT * FROM tournaments WHERE 1 = 1",
    filters=(
        FilterRule(
            param="start_date_min",
            column="start_date",
            match=MatchKind.MIN,
            value_kind=ValueKind.DATE,
            description="Date YYYY-MM-DD (on or after)",
        ),
        FilterRule(
            param="start_date_max",
            column="start_date",
            match=MatchKind.MAX,
            value_kind=ValueKind.DATE,
            description="Date YYYY-MM-DD (on or before)",
        ),
        FilterRule(
            param="winner",
            column="winner",
            description="String (exact team name)",
        ),
        FilterRule(
            param="host_country",
            column="host_country",
            match=MatchKind.SUBSTRING,
            description="String (partial match)",
        ),
        FilterRule(
            param="tournament_type",
            column="tournament_name",
            match=MatchKind.SUBSTRING,
            description="String (e.g. Men's, Women's)",
        ),
    ),
    sort_columns={
        "tournament_id": "tournament_id",
        "start_date": "start_date",
        "tournament_name": "tournament_name",
    },
    default_sort="start_date",
    tie_breaker="tournament_id",
    not_found_message="No tournaments found for that criteria.",
)

TOURNAMENT_MATCHES = ResourceConfig(
    name="tournament_matches",
    uri="/tournaments/{tournament_id}/matches",
    description="Gets the list of matches played in the specified tournament",
    base_sql="SELECT * FROM matches WHERE 1 = 1",
    scope=ScopeRule(
        param="tournament_id",
        column="tournament_id",
        identifier=IdentifierKind.TOURNAMENT,
    ),
    filters=(
        FilterRule(
            param="stage_name",
            column="stage_name",
            description="String (e.g. group stage, final)",
        ),
    ),
    default_sort="key_id",
    tie_breaker="key_id",
    not_found_message="No matches found for tournament ID: {scope_id} or tournament does not exist.",
)

MATCH_PLAYERS = ResourceConfig(
    name="match_players",
    uri="/matches/{match_id}/players",
    description="Gets the list of players who played in the specified match",
    base_sql=(
        "SELECT DISTINCT p.* FROM players p "
        "JOIN player_appearances pa ON p.player_id = pa.player_id "
        "WHERE 1 = 1"
    ),
    scope=ScopeRule(
        param="match_id", column="pa.match_id", identifier=IdentifierKind.MATCH
    ),
    filters=(position_filter(prefix="p."),),
    default_sort="p.family_name",
    tie_breaker="p.player_id",
    not_found_message="No players found for match ID: {scope_id} or match does not exist.",
)

STADIUMS = ResourceConfig(
    name="stadiums",
    uri="/stadiums",
    description="Gets the list of stadiums where World Cup matches took place",
    base_sql=(
        "SELECT DISTINCT s.* FROM stadiums s "
        "JOIN matches m ON s.stadium_id = m.stadium_id "
        "WHERE 1 = 1"
    ),
    filters=(
        FilterRule(
            param="country",
            column="s.country_name",
            match=MatchKind.SUBSTRING,
            value_kind=ValueKind.REQUIRED_TEXT,
            description="String (partial match)",
        ),
        FilterRule(
            param="city",
            column="s.city_name",
            match=MatchKind.SUBSTRING,
            value_kind=ValueKind.REQUIRED_TEXT,
            description="String (partial match)",
        ),
        FilterRule(
            param="capacity",
            column="s.stadium_capacity",
            match=MatchKind.MIN,
            value_kind=ValueKind.NON_NEGATIVE_INT,
            description="Number (at least)",
        ),
    ),
    sort_columns={
        "name": "s.stadium_name",
        "country": "s.country_name",
        "city": "s.city_name",
        "capacity": "s.stadium_capacity",
        "stadium_id": "s.stadium_id",
    },
    default_sort="s.stadium_name",
    tie_breaker="s.stadium_id",
    not_found_message="No stadiums found for that criteria.",
)

STADIUM_MATCHES = ResourceConfig(
    name="stadium_matches",
    uri="/stadiums/{stadium_id}/matches",
    description="Gets the list of matches played in the specified stadium",
    base_sql=(
        "SELECT m.* FROM matches m "
        "JOIN stadiums s ON m.stadium_id = s.stadium_id "
        "LEFT JOIN tournaments t ON m.tournament_id = t.tournament_id "
        "WHERE 1 = 1"
    ),
    scope=ScopeRule(
        param="stadium_id",
        column="s.stadium_id",
        identifier=IdentifierKind.STADIUM,
    ),
    filters=(
        FilterRule(
            param="tournament_name",
            column="t.tournament_name",
            match=MatchKind.SUBSTRING,
            value_kind=ValueKind.REQUIRED_TEXT,
            description="String (partial match)",
        ),
        FilterRule(
            param="stage",
            column="m.stage_name",
            value_kind=ValueKind.REQUIRED_TEXT,
            description="String (e.g. group stage, final)",
        ),
    ),
    default_sort="m.key_id",
    tie_breaker="m.key_id",
    not_found_message="No matches found for stadium ID: {scope_id} or stadium does not exist.",
)

PLAYER_LOOKUP = LookupConfig(
    name="player",
    uri="/players/{player_id}",
    description="Gets the details of the specified player",
    sql="SELECT * FROM players WHERE player_id = :player_id",
    param="player_id",
    identifier=IdentifierKind.PLAYER,
    label="player",
)

TEAM_LOOKUP = LookupConfig(
    name="team",
    uri="/teams/{team_id}",
    description="Gets the details of the specified team",
    sql="SELECT * FROM teams WHERE team_id = :team_id",
    param="team_id",
    identifier=IdentifierKind.TEAM,
    label="team",
)

TOURNAMENT_LOOKUP = LookupConfig(
    name="tournament",
    uri="/tournaments/{tournament_id}",
    description="Gets the details of the specified tournament",
    sql="SELECT * FROM tournaments WHERE tournament_id = :tournament_id",
    param="tournament_id",
    identifier=IdentifierKind.TOURNAMENT,
    label="tournament",
)

# Order in which resources appear in the about document and the CLI
ALL_RESOURCES: tuple[ResourceConfig | LookupConfig, ...] = (
    PLAYERS,
    PLAYER_LOOKUP,
    PLAYER_GOALS,
    PLAYER_APPEARANCES,
    TEAMS,
    TEAM_LOOKUP,
    TEAM_APPEARANCES,
    TOURNAMENTS,
    TOURNAMENT_LOOKUP,
    TOURNAMENT_MATCHES,
    MATCH_PLAYERS,
    STADIUMS,
    STADIUM_MATCHES,
)


def describe_resource(resource: ResourceConfig | LookupConfig) -> dict:
    """
    Describe a resource for the about document.

    Returns:
        Dict with uri, description, filters and, for sortable listings,
        the sort keys and default.
    """
    entry: dict = {"uri": resource.uri, "description": resource.description}
    if isinstance(resource, LookupConfig):
        entry["filtersSupported"] = "N/A"
        return entry

    entry["filtersSupported"] = (
        {rule.param: rule.description for rule in resource.filters}
        if resource.filters
        else "N/A"
    )
    if resource.sort_columns:
        default = next(
            (
                key
                for key, column in resource.sort_columns.items()
                if column == resource.default_sort
            ),
            resource.default_sort,
        )
        entry["sortingSupported"] = {
            "sort_by": list(resource.sort_columns),
            "default": default,
            "default_order": "ASC",
        }
    return entry
