"""
Test suite для rangesum

Contains:
- tests/unit/          : Unit tests for individual modules
"""
