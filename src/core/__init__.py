"""
Core domain models, calendar/money primitives, and payload contracts.

This module contains the foundational building blocks that are independent
of external systems (databases, HTTP frameworks, etc.).
"""
