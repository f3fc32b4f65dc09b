"""
Hexfuel - Hex Grid Fuel Duel

A turn-based board game for one human against a heuristic AI, played on a
hexagon of hexagonal cells. The package provides:
- Cube-coordinate hex geometry
- Board generation and cell state
- Move legality and deterministic state transitions
- Bot policies for the AI side
- Session orchestration, an HTTP API and a text CLI
"""

__version__ = "0.1.0"
