"""Shared fixtures for the Lambda handler tests."""

from unittest.mock import MagicMock

import pytest

from urlshortener.application import create_application


@pytest.fixture()
def apigw_event():
    """Generic API Gateway (Lambda proxy) event, tests fill in method, path and body."""
    return {
        'body': None,
        'resource': '/{proxy+}',
        'headers': {'User-Agent': 'pytest'},
        'httpMethod': 'GET',
        'path': '/',
        'pathParameters': None,
        'requestContext': {
            'resourcePath': '/{proxy+}',
            'httpMethod': 'GET',
            'domainName': 'sho.rt',
            'stage': 'Prod',
        },
    }


@pytest.fixture()
def context():
    """Mock AWS Lambda context object."""
    return MagicMock()


@pytest.fixture()
def application():
    """Fresh Application with an empty in-memory store."""
    return create_application({'base_url': None, 'top_domains_limit': 3})
