from . import core, roast

group_rows = core.group_rows
resolve_team_name = core.resolve_team_name
resolve_record = core.resolve_record
resolve_current_week = core.resolve_current_week
roast_level = roast.roast_level

__all__ = [
    "group_rows",
    "resolve_team_name",
    "resolve_record",
    "resolve_current_week",
    "roast_level",
]
