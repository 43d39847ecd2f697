BOARD_SIZE = 4
# Reaching this tile value ends the game.
MAX_PIECE = 2048
# Width of one cell in the text rendering of a board.
CELL_WIDTH = 4

# Random spawns place a 4 with this probability, otherwise a 2.
SPAWN_FOUR_PROBABILITY = 0.1
