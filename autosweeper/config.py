"""
Central configuration for the autosweeper solver.

Holds the difficulty levels served by the local game server, the wire
protocol tokens, the solver defaults and the logging setup. Constructors
accept keyword overrides for every value used here.
"""

# Difficulty levels, keyed by the integer sent with the "new" command.
# A remote server picks its own sizes; these are used by LocalTransport.
DIFFICULTY_CONFIG = {
    1: {"name": "beginner", "width": 9, "height": 9, "mines": 10},
    2: {"name": "intermediate", "width": 16, "height": 16, "mines": 40},
    3: {"name": "expert", "width": 30, "height": 16, "mines": 99},
    4: {"name": "ultimate", "width": 50, "height": 30, "mines": 300},
}

# Wire protocol
PROTOCOL_CONFIG = {
    "closed_char": "□",  # character sent for a closed cell
    "map_prefix": "map:",  # inbound map messages start with this
    "loss_token": "You lose",
    "win_token": "You win",
}

# Solver defaults
SOLVER_CONFIG = {
    "max_group_variables": None,   # None = no bound on constraint group size
    "first_click": (0, 0),         # opened right after "new"
    "mines_generation_algorithm": "safe_neighborhood_rule",
}

LOGGING_CONFIG = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
}
