"""
Security module for the application.

Adds HTTP security headers to every response.
"""

from .security_headers import SecurityHeaders, init_security

__all__ = [
    'SecurityHeaders',
    'init_security',
]
