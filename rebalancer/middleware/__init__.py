"""
Custom middleware for the rebalancer application.
"""

from .request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
