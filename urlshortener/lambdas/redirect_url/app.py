import logging

from urlshortener.application import Application
from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.constants import Defaults, MISSING_SHORTCODE, SHORT_URL_NOT_FOUND, REDIRECT_SUCCESS
from urlshortener.lambdas.responses import response_307, response_400, response_404


logger = logging.getLogger(__name__)


def extract_shortcode(event: LambdaEvent) -> str | None:
    """Return the shortcode from path parameters, or from a '/r/<code>' path."""
    path_parameters = event.get('pathParameters') or {}
    if path_parameters.get('code'):
        return path_parameters['code']

    path = event.get('path') or ''
    if path.startswith(Defaults.REDIRECT_PATH_PREFIX):
        return path[len(Defaults.REDIRECT_PATH_PREFIX) :] or None
    return None


def handle(event: LambdaEvent, context: LambdaContext, application: Application) -> LambdaResponse:
    """Handle GET /r/{code}

    HTTP responses:
        307: Successful redirect
            headers:
                Location: original URL
        400: Bad client request
            message: missing shortcode in path
        404: Not found
            message: shortcode was never issued

    Args:
        event (dict):
            API Gateway event payload containing the shortcode.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).
        application (Application):
            Store, service and configuration built at cold start.

    Returns:
        dict: API Gateway-compatible response.

    Example:
        >>> response = handle({'path': '/r/m4bHI5oT'}, None, application)
        >>> response['statusCode']
        307
        >>> response['headers']['Location']
        'https://example.com/test'
    """
    shortcode = extract_shortcode(event)
    if shortcode is None:
        logger.info('Missing shortcode in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'code' in path", error_code=MISSING_SHORTCODE)

    target_url = application.shortener.expand(shortcode)
    if target_url is None:
        logger.info(
            'Short URL not found. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message='Short URL not found', error_code=SHORT_URL_NOT_FOUND)

    logger.info(
        'Redirecting client to target URL. Responding with 307.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_307(location=target_url)
