"""
Crossing - River Crossing Puzzle Engine

A deterministic rule engine for the "Family and Thief" river crossing puzzle.
The engine provides:
- Immutable game state with snapshot-based undo
- A pure safety-constraint checker
- A reducer implementing select / sail / undo / reset
- In-memory sessions and an HTTP/WebSocket API for client UIs
"""

__version__ = "0.1.0"
