"""Agent package for compliance screening workflows."""

from .analysis import analyze_screening, Recommendation
from .screening import run_sanction_screen

__all__ = ["analyze_screening", "Recommendation", "run_sanction_screen"]
