"""Unit tests for the API entry point (router + cold start).

Test coverage includes:

1. Route resolution
   - Ensures each known path maps to its handler and unknown paths to None.

2. Routing
   - Ensures unknown paths return HTTP 404 ROUTE_NOT_FOUND.
   - Ensures known paths with the wrong method return HTTP 405 with an Allow header.
   - Ensures requests reach the right handler and share one store.

3. Cold start
   - Ensures the Application is built once and reused by later invocations.
   - Ensures unexpected errors are turned into HTTP 500 responses.
"""

import json
from unittest.mock import MagicMock

import pytest

from urlshortener.lambdas.api import app
from urlshortener.lambdas.shorten_url import app as shorten_url
from urlshortener.lambdas.redirect_url import app as redirect_url
from urlshortener.lambdas.top_domains import app as top_domains


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def _reset_application(monkeypatch):
    """Every test starts from a cold Lambda execution environment."""
    monkeypatch.setattr(app, 'application', None)
    monkeypatch.setattr(app, 'initialize_logging', lambda: None)
    monkeypatch.setattr(app, 'resolve_config', lambda lambda_name: {'base_url': None, 'top_domains_limit': 3})


def request(apigw_event, method, path, body=None):
    apigw_event['httpMethod'] = method
    apigw_event['path'] = path
    apigw_event['body'] = body
    return apigw_event


# -------------------------------
# 1. Route resolution
# -------------------------------


@pytest.mark.parametrize(
    'path, expected',
    [
        ('/shorten', {'POST': shorten_url.handle}),
        ('/metrics/top-domains', {'GET': top_domains.handle}),
        ('/r/EAaArVRs', {'GET': redirect_url.handle}),
        ('/r/', None),
        ('/r', None),
        ('/r/a/b', None),
        ('/r/EAaArVRs/', None),
        ('/', None),
        ('/shorten/extra', None),
        ('/metrics', None),
        ('/redirect', None),
    ],
)
def test_resolve_route(path, expected):
    assert app.resolve_route(path) == expected


# -------------------------------
# 2. Routing
# -------------------------------


@pytest.mark.parametrize('path', ['/', '/unknown', '/metrics', '/r', '/r/', '/r/a/b'])
def test_unknown_route_404(apigw_event, context, application, path):
    response = app.route(request(apigw_event, 'GET', path), context, application)

    assert response['statusCode'] == 404
    assert json.loads(response['body'])['errorCode'] == 'ROUTE_NOT_FOUND'


@pytest.mark.parametrize(
    'method, path, allowed',
    [
        ('GET', '/shorten', 'POST'),
        ('DELETE', '/shorten', 'POST'),
        ('POST', '/r/EAaArVRs', 'GET'),
        ('POST', '/metrics/top-domains', 'GET'),
    ],
)
def test_wrong_method_405(apigw_event, context, application, method, path, allowed):
    response = app.route(request(apigw_event, method, path), context, application)

    assert response['statusCode'] == 405
    assert response['headers']['Allow'] == allowed
    assert json.loads(response['body']) == {'message': 'Method Not Allowed', 'errorCode': 'METHOD_NOT_ALLOWED'}


def test_route_dispatches_to_handler(monkeypatch, apigw_event, context, application):
    handle = MagicMock(return_value={'statusCode': 200})
    monkeypatch.setattr(shorten_url, 'handle', handle)
    event = request(apigw_event, 'post', '/shorten', '{"url": "https://example.com"}')

    assert app.route(event, context, application) == {'statusCode': 200}
    handle.assert_called_once_with(event, context, application)


def test_routes_share_one_store(apigw_event, context):
    shorten = app.lambda_handler(request(dict(apigw_event), 'POST', '/shorten', '{"url": "https://example.com/test"}'), context)
    short_code = json.loads(shorten['body'])['short_code']

    redirect = app.lambda_handler(request(dict(apigw_event), 'GET', f'/r/{short_code}'), context)
    metrics = app.lambda_handler(request(dict(apigw_event), 'GET', '/metrics/top-domains'), context)

    assert shorten['statusCode'] == 200
    assert redirect['statusCode'] == 307
    assert redirect['headers']['Location'] == 'https://example.com/test'
    assert json.loads(metrics['body']) == [{'domain': 'example.com', 'count': 1}]


# -------------------------------
# 3. Cold start
# -------------------------------


def test_application_is_built_once(monkeypatch, apigw_event, context):
    bootstrap = MagicMock(wraps=app.bootstrap)
    monkeypatch.setattr(app, 'bootstrap', bootstrap)

    app.lambda_handler(request(apigw_event, 'GET', '/metrics/top-domains'), context)
    first = app.application
    app.lambda_handler(request(apigw_event, 'GET', '/metrics/top-domains'), context)

    bootstrap.assert_called_once_with()
    assert app.application is first
    assert first.config == {'base_url': None, 'top_domains_limit': 3}


def test_lambda_handler_500_on_unexpected_error(monkeypatch, apigw_event, context):
    monkeypatch.setattr('urlshortener.utils.helpers.running_locally', lambda: False)
    monkeypatch.setattr(app, 'route', MagicMock(side_effect=RuntimeError('boom')))

    response = app.lambda_handler(request(apigw_event, 'GET', '/metrics/top-domains'), context)

    assert response['statusCode'] == 500
    assert json.loads(response['body'])['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'


def test_lambda_handler_500_on_bad_configuration(monkeypatch, apigw_event, context):
    monkeypatch.setattr('urlshortener.utils.helpers.running_locally', lambda: False)
    monkeypatch.setattr(app, 'resolve_config', lambda lambda_name: {'top_domains_limit': 0})

    response = app.lambda_handler(request(apigw_event, 'GET', '/metrics/top-domains'), context)

    assert response['statusCode'] == 500
    assert app.application is None
