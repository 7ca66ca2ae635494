"""Column table for alternate-line player props (``nfl_odds_alternate_lines``)."""

from ..coerce import ColumnKind
from ..normalize import TableSpec, columns

INTEGER = ColumnKind.INTEGER
FLOAT = ColumnKind.FLOAT
TEXT = ColumnKind.TEXT

TABLE_NAME = "nfl_odds_alternate_lines"

COLUMNS = columns(
    ("id", TEXT),
    ("event_id", TEXT),
    ("sport_key", TEXT),
    ("commence_time", TEXT),
    ("home_team", TEXT),
    ("away_team", TEXT),
    ("week_number", INTEGER),
    ("season_year", INTEGER),
    ("bookmaker_key", TEXT),
    ("bookmaker_title", TEXT),
    ("bookmaker_last_update", TEXT),
    ("market_key", TEXT),
    ("market_name", TEXT),
    ("player_name", TEXT),
    ("prop_type", TEXT),
    ("outcome_name", TEXT),
    ("outcome_price", FLOAT),
    ("decimal_price", FLOAT),
    ("line_value", FLOAT),
    ("bet_type", TEXT),
    ("updated_at", TEXT),
)

TABLE_SPEC = TableSpec(
    name=TABLE_NAME,
    columns=COLUMNS,
    conflict_key=("event_id", "bookmaker_key", "market_key", "player_name", "line_value", "outcome_name"),
)
