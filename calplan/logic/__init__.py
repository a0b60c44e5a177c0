"""Core business logic layer.

Subpackages:
- plans: pure store operations and the owned state cell
- reporting: share text and outcome statistics
- monthly: month overview data
"""
__all__ = ["plans", "reporting", "monthly"]
