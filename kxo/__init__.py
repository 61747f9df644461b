"""Self-playing 4x4 tic-tac-toe engine with tree-search and negamax players."""

__version__ = "0.1.0"