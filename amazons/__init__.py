"""
Game of the Amazons engine package.

This package implements a 10x10 Amazons engine: lazy legal-move generation
over a precomputed ray table, territory heuristics, and an iterative-deepening
minimax search with alpha-beta pruning under a wall-clock budget.

Modules:
    constants - Board geometry, starting layout, search limits
    errors    - InvalidCoordinate, InvalidNotation, NoPieceAtSource
    geometry  - Coordinates, compass directions, MoveTable
    board     - Board, Move notation, reachability and move enumeration
    evaluate  - Mobility and territory heuristics
    search    - Alpha-beta minimax, iterative deepening, random mover
    settings  - Environment-driven engine configuration
"""
