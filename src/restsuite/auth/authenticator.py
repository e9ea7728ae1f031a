"""Authentication decoration of accepted test cases."""

from typing import Dict, Optional

from restsuite.base_interfaces import Authenticator
from restsuite.config.generator_config import GeneratorConfig
from restsuite.testcases.data_models import TestCase


class NoAuthenticator(Authenticator):
    """Leaves test cases unauthenticated (still returns a copy)."""

    def authenticate(self, test_case: TestCase) -> TestCase:
        return test_case.copy()


class StaticAuthenticator(Authenticator):
    """Adds fixed header and query parameters to every test case.

    Values already present in the test case are overwritten, so that an
    authenticated request always carries the configured credentials.
    """

    def __init__(self, headers: Optional[Dict[str, str]] = None,
                 query_parameters: Optional[Dict[str, str]] = None):
        self.headers = dict(headers or {})
        self.query_parameters = dict(query_parameters or {})

    def authenticate(self, test_case: TestCase) -> TestCase:
        authenticated = test_case.copy()
        authenticated.header_parameters.update(self.headers)
        authenticated.query_parameters.update(self.query_parameters)
        return authenticated


def create_authenticator(config: GeneratorConfig) -> Authenticator:
    """Build the authenticator described by the configuration."""
    if config.auth_headers or config.auth_query_parameters:
        return StaticAuthenticator(config.auth_headers, config.auth_query_parameters)
    return NoAuthenticator()
