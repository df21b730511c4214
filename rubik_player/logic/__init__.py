from rubik_player.logic.moves import (
    Move,
    inverse_move,
    inverse_sequence,
    parse_sequence,
    sequence_to_string,
)

__all__ = ["Move", "inverse_move", "inverse_sequence", "parse_sequence", "sequence_to_string"]
