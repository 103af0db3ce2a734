"""Prompt text for matchup preview generation."""

from __future__ import annotations

from .models import Game, GameSide, LeagueContext, Player

SYSTEM_PROMPT = (
    "You are a fantasy football analyst writing engaging matchup previews. "
    "Use only the provided Sleeper API data. Structure your analysis in three sections: "
    "MATCHUP PREVIEW, PLAYERS TO WATCH, and PREDICTION. "
    "Write in an entertaining, analytical style."
)


def group_by_position(players: tuple[Player, ...]) -> dict[str, list[Player]]:
    """Position -> players, positions in first-seen order."""
    groups: dict[str, list[Player]] = {}
    for p in players:
        groups.setdefault(p.position, []).append(p)
    return groups


def _lineup_lines(side: GameSide) -> list[str]:
    lines = [f"{side.manager}'s Lineup:"]
    if not side.starters:
        lines.append("Lineup not yet set")
    for pos, players in group_by_position(side.starters).items():
        lines.append(f"{pos}: {', '.join(p.name for p in players)}")
    lines.append("")
    return lines


def build_prompt(game: Game, context: LeagueContext) -> str:
    t1, t2 = game.team1, game.team2
    lines = [
        f"WEEK {context.week} MATCHUP PREVIEW",
        "",
        f"MATCHUP: {t1.team_name} vs {t2.team_name}",
        f"{t1.manager} ({t1.record}) vs {t2.manager} ({t2.record})",
        "",
    ]
    for side in game.sides:
        lines.extend(_lineup_lines(side))
    lines.append(
        f"This week's projections: {t1.manager} {t1.projected:.1f} pts, "
        f"{t2.manager} {t2.projected:.1f} pts"
    )
    lines.append("")
    lines.append(
        "Write a 400+ word analysis with three sections: "
        "MATCHUP PREVIEW, PLAYERS TO WATCH, and PREDICTION."
    )
    lines.append('Return JSON: {"preview": "your full analysis"}')
    return "\n".join(lines)
