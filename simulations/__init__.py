# simulations/__init__.py
"""
Monte Carlo simulations for the 100 prisoners problem.

Run via:
    python -m simulations.compare --prisoners 100 --trials 10000 --strategy both
"""
