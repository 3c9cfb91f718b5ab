"""
Middleware package for TikSave API.

This package contains the error handling middleware.
"""

from .error_handler import ErrorHandlingMiddleware, validation_exception_handler

__all__ = ['ErrorHandlingMiddleware', 'validation_exception_handler']
