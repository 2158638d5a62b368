"""
Core numeric primitives and contracts.

This module contains the foundational building blocks that are independent
of converter semantics: the number tower, the fluent calculator, π digits
and JSON contract validation.
"""
