"""
Security headers module.

Adds security headers to every API response. Quiz-taking responses must
never be cached by intermediaries since answers are graded server-side.
"""

from flask import Flask, current_app


class SecurityHeaders:
    """
    Security headers middleware.

    Adds various security headers to HTTP responses to protect against
    common web vulnerabilities.
    """

    CONTENT_SECURITY_POLICY = (
        "default-src 'none'; "
        "frame-ancestors 'none'; "
        "base-uri 'none'; "
        "form-action 'self';"
    )

    PERMISSIONS_POLICY = (
        "geolocation=(), "
        "microphone=(), "
        "camera=(), "
        "payment=(), "
        "usb=()"
    )

    @classmethod
    def init_app(cls, app: Flask):
        """
        Initialize security headers for the Flask app.

        Args:
            app: Flask application instance
        """
        @app.after_request
        def add_security_headers(response):
            """Add security headers to all responses."""
            response.headers['Content-Security-Policy'] = cls.CONTENT_SECURITY_POLICY

            # Prevent MIME type sniffing
            response.headers['X-Content-Type-Options'] = 'nosniff'

            # The API is never framed
            response.headers['X-Frame-Options'] = 'DENY'

            response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
            response.headers['Permissions-Policy'] = cls.PERMISSIONS_POLICY

            if response.mimetype == 'application/json':
                response.cache_control.no_store = True

            # Strict-Transport-Security: Force HTTPS (only in production)
            if current_app.config.get('SESSION_COOKIE_SECURE', False):
                response.headers['Strict-Transport-Security'] = (
                    'max-age=31536000; includeSubDomains; preload'
                )

            if 'Server' in response.headers:
                del response.headers['Server']

            return response


def init_security(app: Flask):
    """
    Initialize all security features for the Flask app.

    Args:
        app: Flask application instance
    """
    SecurityHeaders.init_app(app)
    app.logger.info("Security headers initialized")
