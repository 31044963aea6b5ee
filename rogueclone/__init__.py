"""Engine for a classic Rogue-style dungeon game: levels, items, monsters and movement."""

__version__ = "6.0.0"

__all__ = [
    "dungeon",
    "items",
    "monsters",
    "movement",
    "pack",
    "population",
    "rings",
    "rng",
]