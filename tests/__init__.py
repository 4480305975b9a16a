"""
Test suite for the seminorm engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
