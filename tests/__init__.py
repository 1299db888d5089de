"""
Test suite for the scaffold fire simulation.

Run with: pytest tests/
"""
