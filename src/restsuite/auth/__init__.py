"""Authentication decorators for generated test cases."""

from restsuite.auth.authenticator import (
    NoAuthenticator,
    StaticAuthenticator,
    create_authenticator,
)

__all__ = ['NoAuthenticator', 'StaticAuthenticator', 'create_authenticator']
