"""
Test suite for matcalc

Contains:
- tests/unit/          : Unit tests for matrix engine, workspace and CLI
"""
