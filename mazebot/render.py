"""
Text rendering of a run's explored cells.

Produces a rich Text so the same rendering can go to the console with
colors or to log files as plain text.
"""

from typing import TYPE_CHECKING

from rich.text import Text

from mazebot.api.models import Position

if TYPE_CHECKING:
    from mazebot.agent.state import RunState

START_CHAR = "S"
GOAL_CHAR = "G"
PLAYER_CHAR = "@"
VISITED_CHAR = "."
UNKNOWN_CHAR = " "


def render_run(run: "RunState") -> Text:
    """
    Draw the explored part of the maze, one character per cell.

    Covers the inferred extent, grown to include every known cell.
    """
    cells = list(run.visited)
    for pos in (run.current, run.goal, run.start, run.extent):
        if pos is not None:
            cells.append(pos)
    if not cells:
        return Text("(nothing explored)")

    max_x = max(max(p.x for p in cells), 0)
    max_y = max(max(p.y for p in cells), 0)

    text = Text()
    for y in range(max_y + 1):
        for x in range(max_x + 1):
            pos = Position(x, y)
            if pos == run.current:
                text.append(PLAYER_CHAR, style="bold yellow")
            elif pos == run.goal:
                text.append(GOAL_CHAR, style="bold green")
            elif pos == run.start:
                text.append(START_CHAR, style="cyan")
            elif pos in run.visited:
                text.append(VISITED_CHAR, style="dim")
            else:
                text.append(UNKNOWN_CHAR)
        if y < max_y:
            text.append("\n")
    return text
