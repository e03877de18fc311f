"""
Test suite for cash-buying-power

Contains:
- tests/unit/      : Unit tests for individual modules
- tests/helpers.py : Builders for securities, cash books and portfolio snapshots
"""
