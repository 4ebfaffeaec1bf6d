import json
import logging

from urlshortener.application import Application
from urlshortener.exceptions import ValidationError
from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.utils import get_short_url
from urlshortener.constants import INVALID_JSON, MISSING_URL, INVALID_URL, SHORTEN_SUCCESS
from urlshortener.lambdas.responses import response_200, response_400


logger = logging.getLogger(__name__)


def parse_request_body(raw: str | None) -> dict:
    """Decode the JSON object of a shorten request, a 'null' body counts as {}.

    Raises:
        ValueError:
            If the body is empty or not JSON, is not an object, or holds
            a non-string 'url'.
    """
    body = json.loads(raw or '')
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValueError('request body must be a JSON object')
    if body.get('url') is not None and not isinstance(body['url'], str):
        raise ValueError("'url' must be a string")
    return body


def handle(event: LambdaEvent, context: LambdaContext, application: Application) -> LambdaResponse:
    """Handle POST /shorten

    This handler follows this procedure to shorten URLs:
    - Step 1: Extract the URL from the JSON request body
    - Step 2: Shorten it (validation, deduplication and metrics happen in the service)
    - Step 3: Respond with the original URL, the short URL and the shortcode

    HTTP responses:
        200: Successful URL shortening
            original_url: original url (provided in request)
            short_url: <base url>/r/<shortcode>
            short_code: shortcode
        400: Bad client request
            message: malformed body (not a JSON object, non-string url), missing url,
                     or why the URL was rejected

    Args:
        event (dict):
            API Gateway event payload in Lambda Proxy format.
        context (Any):
            AWS Lambda context object (not used directly).
        application (Application):
            Store, service and configuration built at cold start.

    Returns:
        dict: API Gateway-compatible response.

    Example:
        >>> event = {'body': '{"url": "https://example.com/test"}'}
        >>> response = handle(event, None, application)
        >>> json.loads(response['body'])['short_code']
        'm4bHI5oT'
    """
    # 1- Extract original URL from request body
    try:
        request_body = parse_request_body(event.get('body'))
    except ValueError as e:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON, 'reason': str(e)})
        return response_400(message='Invalid request body', error_code=INVALID_JSON)

    url = request_body.get('url')
    if not url:
        logger.info("Missing 'url' in JSON body. Responding with 400.", extra={'event': MISSING_URL})
        return response_400(message='URL is required', error_code=MISSING_URL)

    # 2- Shorten URL
    try:
        shortcode = application.shortener.shorten(url)
    except ValidationError as e:
        logger.info('URL rejected. Responding with 400.', extra={'event': INVALID_URL, 'reason': str(e)})
        return response_400(message=str(e), error_code=INVALID_URL)

    # 3- Respond with the short URL
    short_url = get_short_url(shortcode, event, base=application.config.get('base_url'))
    logger.info('Shortened URL. Responding with 200.', extra={'shortcode': shortcode, 'event': SHORTEN_SUCCESS})
    return response_200(
        {
            'original_url': url,
            'short_url': short_url,
            'short_code': shortcode,
        }
    )
