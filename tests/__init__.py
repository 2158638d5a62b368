"""
Test suite for exact-unit-converters

Contains:
- tests/unit/          : Unit tests for individual modules
"""
