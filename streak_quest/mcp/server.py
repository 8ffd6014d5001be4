"""FastMCP server instance – mounted inside FastAPI."""

from fastmcp import FastMCP

mcp = FastMCP(
    name="StreakQuest",
    instructions=(
        "Streak Quest tools for joining the weekly game, completing daily tasks, "
        "and reading player stats, the task pool and the leaderboard. "
        "Write tools require the caller's x_player_address."
    ),
)

# Import tool modules to register @mcp.tool decorators
from streak_quest.mcp.tools import game_tools  # noqa: E402, F401
