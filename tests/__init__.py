"""
Test suite for geoarea

Contains:
- tests/unit/          : Unit tests for individual modules
"""
