"""
Core matrix engine, numerical primitives, and data contracts.

This package contains the computational building blocks that are independent
of storage and user interaction (workspace, CLI).
"""
