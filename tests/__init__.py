"""
Test suite for resale analytics

Contains:
- tests/unit/          : Unit tests for individual modules
"""
