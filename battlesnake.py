import logging
import random
from typing import Callable, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from config import Settings, load_settings

logger = logging.getLogger(__name__)

# Fixed enumeration order: safe moves are reported in this order and greedy
# food seeking breaks distance ties in favour of the earlier direction.
DIRECTIONS = ['up', 'down', 'left', 'right']
DIRECTION_VECTORS = {
    'up': (0, 1),
    'down': (0, -1),
    'left': (-1, 0),
    'right': (1, 0)
}

FALLBACK_MOVE = 'down'

MODE_DEFAULT = 'default'
MODE_STARVING = 'starving'


class InvalidGameState(ValueError):
    """Raised when a snapshot breaks the assumptions the move logic relies on"""


class BattlesnakeLogic:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

        # New strategies plug in here: add a mode constant, a picker method,
        # and a branch in select_mode that returns it.
        self.mode_pickers: Dict[str, Callable[[Dict, List[str]], str]] = {
            MODE_DEFAULT: self.pick_default_move,
            MODE_STARVING: self.pick_starving_move,
        }

    def get_move(self, game_state: Dict) -> str:
        """Main function to determine the next move"""
        self.validate_game_state(game_state)
        game_id = _game_id(game_state)
        turn = game_state.get('turn', 0)

        safe_moves = self.get_safe_moves(game_state)
        logger.debug("%s Safe moves available: %s", game_id, safe_moves)

        if not safe_moves:
            logger.info("%s MOVE %d: No safe moves detected! Moving %s",
                        game_id, turn, FALLBACK_MOVE)
            return FALLBACK_MOVE

        mode = self.select_mode(game_state)
        next_move = self.mode_pickers[mode](game_state, safe_moves)

        logger.info("%s MODE %s MOVE %d: %s", game_id, mode, turn, next_move)
        return next_move

    def validate_game_state(self, game_state: Dict):
        """Reject snapshots the safety filter cannot reason about"""
        board = game_state['board']
        if board['width'] < 1 or board['height'] < 1:
            raise InvalidGameState(
                f"board must be at least 1x1, got {board['width']}x{board['height']}")

        body = game_state['you']['body']
        if len(body) < 2:
            raise InvalidGameState(
                f"snake body needs a head and a neck, got {len(body)} segment(s)")

    def get_safe_moves(self, game_state: Dict) -> List[str]:
        """Get all moves that don't immediately kill us (neck, walls, snake bodies)"""
        my_snake = game_state['you']
        board = game_state['board']
        head = my_snake['body'][0]
        neck = my_snake['body'][1]

        possible_moves = {direction: True for direction in DIRECTIONS}

        # Don't move back onto our own neck
        if neck['x'] < head['x']:
            possible_moves['left'] = False
        elif neck['x'] > head['x']:
            possible_moves['right'] = False
        elif neck['y'] < head['y']:
            possible_moves['down'] = False
        elif neck['y'] > head['y']:
            possible_moves['up'] = False

        # Walls
        if head['x'] == 0:
            possible_moves['left'] = False
        if head['x'] == board['width'] - 1:
            possible_moves['right'] = False
        if head['y'] == 0:
            possible_moves['down'] = False
        if head['y'] == board['height'] - 1:
            possible_moves['up'] = False

        game_id = _game_id(game_state)
        my_body = self.body_positions(my_snake)
        # Every snake on the board, ours included.
        snake_bodies = [self.body_positions(snake) for snake in board['snakes']]

        # Every current segment counts as solid, tails included.
        for direction in DIRECTIONS:
            new_pos = self.get_new_position(head, direction)

            if new_pos in my_body:
                logger.info("%s Body collision prevent moving %s", game_id, direction)
                possible_moves[direction] = False

            for snake_body in snake_bodies:
                if new_pos in snake_body:
                    logger.info("%s Snake collision prevent moving %s", game_id, direction)
                    possible_moves[direction] = False
                    break

        return [direction for direction in DIRECTIONS if possible_moves[direction]]

    def get_new_position(self, head: Dict, direction: str) -> Tuple[int, int]:
        """Calculate new head position for a given direction"""
        if direction not in DIRECTION_VECTORS:
            raise ValueError(f"unknown move: {direction!r}")
        dx, dy = DIRECTION_VECTORS[direction]
        return (head['x'] + dx, head['y'] + dy)

    def body_positions(self, snake: Dict) -> List[Tuple[int, int]]:
        return [(segment['x'], segment['y']) for segment in snake['body']]

    def select_mode(self, game_state: Dict) -> str:
        """Starving when health can't cover the board's longest walk"""
        board = game_state['board']
        health = game_state['you']['health']

        if health < (board['height'] - 1) + (board['width'] - 1):
            return MODE_STARVING
        return MODE_DEFAULT

    def pick_default_move(self, game_state: Dict, safe_moves: List[str]) -> str:
        # take a random walk
        return self.rng.choice(safe_moves)

    def pick_starving_move(self, game_state: Dict, safe_moves: List[str]) -> str:
        """Greedy step towards the nearest food; ties keep the earlier move"""
        head = game_state['you']['body'][0]
        board = game_state['board']

        min_distance = board['height'] + board['width']
        towards_food = safe_moves[0]
        for direction in safe_moves:
            target = self.get_new_position(head, direction)
            distance = self.distance_to_nearest_food(game_state, target)
            if distance < min_distance:
                towards_food = direction
                min_distance = distance

        return towards_food

    def distance_to_nearest_food(self, game_state: Dict, pos: Tuple[int, int]) -> int:
        """Manhattan distance to the closest food, height + width if there is none"""
        board = game_state['board']
        min_distance = board['height'] + board['width']

        for food in board['food']:
            distance = self.manhattan_distance(pos, (food['x'], food['y']))
            if distance < min_distance:
                min_distance = distance

        return min_distance

    def manhattan_distance(self, pos1: Tuple[int, int], pos2: Tuple[int, int]) -> int:
        """Calculate Manhattan distance between two positions"""
        return abs(pos1[0] - pos2[0]) + abs(pos1[1] - pos2[1])


def _game_id(game_state: Optional[Dict]) -> str:
    if not isinstance(game_state, dict):
        return ''
    game = game_state.get('game')
    if not isinstance(game, dict):
        return ''
    return game.get('id', '')


# Flask server integration
def create_battlesnake_server(logic: Optional[BattlesnakeLogic] = None,
                              settings: Optional[Settings] = None) -> Flask:
    """Create Flask server for Battlesnake"""
    app = Flask(__name__)
    snake_logic = logic if logic is not None else BattlesnakeLogic()
    settings = settings if settings is not None else load_settings()

    @app.route('/')
    def info():
        logger.info("INFO")
        return jsonify(settings.info())

    @app.route('/start', methods=['POST'])
    def start():
        game_state = request.get_json(silent=True)
        logger.info("%s START", _game_id(game_state))
        return "OK"

    @app.route('/move', methods=['POST'])
    def move():
        game_state = request.get_json(silent=True)
        try:
            next_move = snake_logic.get_move(game_state)
        except Exception:
            logger.exception("%s Could not pick a move, falling back to %s",
                             _game_id(game_state), FALLBACK_MOVE)
            next_move = FALLBACK_MOVE
        return jsonify({"move": next_move})

    @app.route('/end', methods=['POST'])
    def end():
        game_state = request.get_json(silent=True)
        logger.info("%s END", _game_id(game_state))
        return "OK"

    # Health check endpoint
    @app.route('/health')
    def health():
        return jsonify({"status": "healthy"})

    return app
