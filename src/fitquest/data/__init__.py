"""Data loading utilities."""

from .exercise_loader import load_exercise_library, seed_exercises_from_json

__all__ = ["load_exercise_library", "seed_exercises_from_json"]
