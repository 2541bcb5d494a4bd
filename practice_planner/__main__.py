"""
Entry point for running Practice Planner as a module.

Usage:
    python -m practice_planner today
    python -m practice_planner practice
    python -m practice_planner --help
"""
from .cli import main

if __name__ == "__main__":
    main()
