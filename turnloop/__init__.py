"""
Turn Loop - Core Package
Grid geometry, loop turns, puzzle generation, the player's connection graph,
the drag editor and win validation.
"""
import logging

from .grid import Cell, Grid, is_adjacent
from .loop_model import build_graph_turn_map, build_turn_map, count_turns_in_area, turns_at
from .connection_graph import ConnectionGraph
from .path_editor import DragState, EditorState, PathEditor
from .validators import LoopFeedback, check_win, check_win_condition, evaluate_loop
from .errors import GenerationExhaustedError
from .game_state import GameState, GameStatus

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Cell', 'Grid', 'is_adjacent',
    'build_graph_turn_map', 'build_turn_map', 'count_turns_in_area', 'turns_at',
    'ConnectionGraph', 'DragState', 'EditorState', 'PathEditor',
    'LoopFeedback', 'check_win', 'check_win_condition', 'evaluate_loop',
    'GenerationExhaustedError', 'GameState', 'GameStatus',
]
