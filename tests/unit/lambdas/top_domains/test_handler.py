"""Unit tests for the top_domains handler.

Test coverage includes:

1. Empty store
   - Ensures an empty JSON array is returned (HTTP 200).

2. Ranking
   - Ensures domains are reported most shortened first, limited by configuration.
"""

import json

from urlshortener.application import create_application
from urlshortener.lambdas.top_domains import app


def test_top_domains_empty(apigw_event, context, application):
    response = app.handle(apigw_event, context, application)

    assert response['statusCode'] == 200
    assert json.loads(response['body']) == []


def test_top_domains_ranked_and_limited(apigw_event, context, application):
    for url in ['https://a.com/1', 'https://a.com/2', 'https://b.com/1', 'https://c.com/1', 'https://c.com/2', 'https://d.com/1', 'https://c.com/3']:
        application.shortener.shorten(url)

    response = app.handle(apigw_event, context, application)

    assert response['statusCode'] == 200
    assert json.loads(response['body']) == [
        {'domain': 'c.com', 'count': 3},
        {'domain': 'a.com', 'count': 2},
        {'domain': 'b.com', 'count': 1},
    ]


def test_top_domains_respects_configured_limit(apigw_event, context):
    application = create_application({'top_domains_limit': 1})
    application.shortener.shorten('https://example.com/1')
    application.shortener.shorten('https://test.com/1')

    body = json.loads(app.handle(apigw_event, context, application)['body'])

    assert body == [{'domain': 'example.com', 'count': 1}]
