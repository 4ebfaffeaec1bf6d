"""Unit tests for the shorten_url handler.

Test coverage includes:

1. Successful shortening
   - Ensures the handler returns the original URL, short URL and shortcode (HTTP 200).
   - Ensures the configured base URL takes precedence over the request domain.
   - Ensures repeated requests return the same shortcode.

2. Invalid JSON body
   - Ensures empty or malformed bodies, non-object bodies and non-string urls
     return HTTP 400 INVALID_JSON.

3. Missing `url` key
   - Ensures requests without a usable url return HTTP 400 MISSING_URL.

4. Rejected URLs
   - Ensures URLs failing validation return HTTP 400 INVALID_URL with the reason.
"""

import json

import pytest

from urlshortener.application import create_application
from urlshortener.lambdas.shorten_url import app


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture()
def shorten_event(apigw_event):
    def build(body):
        apigw_event['httpMethod'] = 'POST'
        apigw_event['path'] = '/shorten'
        apigw_event['body'] = body
        return apigw_event

    return build


# -------------------------------
# 1. Successful shortening
# -------------------------------


def test_shorten_url_200(shorten_event, context, application):
    event = shorten_event(json.dumps({'url': 'https://example.com/test'}))

    response = app.handle(event, context, application)
    body = json.loads(response['body'])

    assert response['statusCode'] == 200
    assert response['headers']['Content-Type'] == 'application/json'
    assert body == {
        'original_url': 'https://example.com/test',
        'short_url': 'https://sho.rt/r/m4bHI5oT',
        'short_code': 'm4bHI5oT',
    }
    assert application.shortener.expand('m4bHI5oT') == 'https://example.com/test'


def test_shorten_url_uses_configured_base_url(shorten_event, context):
    application = create_application({'base_url': 'https://links.example.com/', 'top_domains_limit': 3})
    event = shorten_event(json.dumps({'url': 'https://example.com'}))

    body = json.loads(app.handle(event, context, application)['body'])

    assert body['short_url'] == 'https://links.example.com/r/EAaArVRs'


def test_shorten_url_is_idempotent(shorten_event, context, application):
    event = shorten_event(json.dumps({'url': 'https://example.com'}))

    first = json.loads(app.handle(event, context, application)['body'])
    second = json.loads(app.handle(event, context, application)['body'])

    assert first['short_code'] == second['short_code'] == 'EAaArVRs'
    assert application.dao.count() == 1


# -------------------------------
# 2. Invalid JSON body
# -------------------------------


@pytest.mark.parametrize(
    'body',
    [
        None,
        '',
        '{"url": ',
        'not json',
        '{bad}',
        '["https://example.com"]',
        '"https://example.com"',
        '{"url": 42}',
        '{"url": ["https://example.com"]}',
    ],
)
def test_shorten_url_invalid_json_400(shorten_event, context, application, body):
    response = app.handle(shorten_event(body), context, application)
    body = json.loads(response['body'])

    assert response['statusCode'] == 400
    assert body == {'message': 'Invalid request body', 'errorCode': 'INVALID_JSON'}


# -------------------------------
# 3. Missing `url` key
# -------------------------------


@pytest.mark.parametrize(
    'body',
    [
        'null',
        '{}',
        '{"target_url": "https://example.com"}',
        '{"url": ""}',
        '{"url": null}',
    ],
)
def test_shorten_url_missing_url_400(shorten_event, context, application, body):
    response = app.handle(shorten_event(body), context, application)
    body = json.loads(response['body'])

    assert response['statusCode'] == 400
    assert body == {'message': 'URL is required', 'errorCode': 'MISSING_URL'}
    assert application.dao.count() == 0


# -------------------------------
# 4. Rejected URLs
# -------------------------------


@pytest.mark.parametrize(
    'url, message',
    [
        ('ftp://example.com', 'URL must have http or https scheme'),
        ('example.com', 'URL must have http or https scheme'),
        ('https://', 'URL must have a host'),
        ('http://exa mple.com', 'invalid URL format: invalid character " " in host name'),
    ],
)
def test_shorten_url_invalid_url_400(shorten_event, context, application, url, message):
    response = app.handle(shorten_event(json.dumps({'url': url})), context, application)
    body = json.loads(response['body'])

    assert response['statusCode'] == 400
    assert body == {'message': message, 'errorCode': 'INVALID_URL'}
    assert application.dao.count() == 0
