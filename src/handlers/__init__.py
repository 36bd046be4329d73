"""
Lambda handlers package for AWS Lambda functions.
"""
from .pregnancy import handler
from .cycle import handler as cycle_handler

__all__ = ["handler", "cycle_handler"]
