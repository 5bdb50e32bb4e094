from klotski.models.board import Configuration, Direction, Piece, check_configuration
from klotski.models.events import MoveEvent, diff_configurations
from klotski.models.level import Goal, Level, get_level, load_levels, sorted_levels

__all__ = [
    "Configuration",
    "Direction",
    "Goal",
    "Level",
    "MoveEvent",
    "Piece",
    "check_configuration",
    "diff_configurations",
    "get_level",
    "load_levels",
    "sorted_levels",
]
