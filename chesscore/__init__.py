"""Chess engine building blocks: bitboards, attack tables and runtime utilities."""

__version__ = "0.1.0"
__all__ = ["bitboard", "misc"]