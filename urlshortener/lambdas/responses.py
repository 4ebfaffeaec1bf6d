"""API Gateway (Lambda proxy) response builders

Every builder returns a dict with 'statusCode', 'headers' and a JSON 'body'.
Error bodies look like {"message": "...", "errorCode": "..."}.
"""

import json
from typing import Any

from urlshortener.types import HttpHeaders, LambdaResponse


JSON_HEADERS: HttpHeaders = {'Content-Type': 'application/json'}


def _error_body(base: str, message: str | None, error_code: str | None) -> str:
    body = {'message': message or base}
    if error_code:
        body['errorCode'] = error_code
    return json.dumps(body)


def response_200(body: Any) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def response_307(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 307,
        'headers': {'Location': location},
        'body': '',  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 400,
        'headers': dict(JSON_HEADERS),
        'body': _error_body('Bad Request', message, error_code),
    }


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 404,
        'headers': dict(JSON_HEADERS),
        'body': _error_body('Not Found', message, error_code),
    }


def response_405(*, allowed: list[str], error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 405,
        'headers': {**JSON_HEADERS, 'Allow': ', '.join(allowed)},
        'body': _error_body('Method Not Allowed', None, error_code),
    }
