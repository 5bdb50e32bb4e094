from klotski.engine.movement.moves import Move, apply_move, can_move, move_piece

__all__ = ["Move", "apply_move", "can_move", "move_piece"]
