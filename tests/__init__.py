"""
Test suite for fxmatrix

Contains:
- tests/unit/          : Unit tests for individual modules
"""
