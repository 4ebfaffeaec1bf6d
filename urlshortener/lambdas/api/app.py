"""Lambda entry point for the URL shortener HTTP API

One function serves every route so that all requests handled by a Lambda
execution environment share the same in-memory store:

    POST /shorten               -> urlshortener.lambdas.shorten_url
    GET  /r/{code}              -> urlshortener.lambdas.redirect_url
    GET  /metrics/top-domains   -> urlshortener.lambdas.top_domains

The Application (store + service + config) is built on the first invocation
(cold start) by `bootstrap()` and reused by later invocations of the same
execution environment.
"""

import re
import logging
from collections.abc import Callable

from urlshortener.application import Application, create_application
from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.utils import app_env, app_name, guarantee_500_response, initialize_logging, resolve_config
from urlshortener.constants import Defaults, ROUTE_NOT_FOUND, METHOD_NOT_ALLOWED
from urlshortener.lambdas.responses import response_404, response_405
from urlshortener.lambdas.shorten_url import app as shorten_url
from urlshortener.lambdas.redirect_url import app as redirect_url
from urlshortener.lambdas.top_domains import app as top_domains


logger = logging.getLogger(__name__)

LAMBDA_NAME = 'api'

type RouteHandler = Callable[[LambdaEvent, LambdaContext, Application], LambdaResponse]

# Exactly one non-empty segment after the prefix, like /r/{code}
REDIRECT_PATH = re.compile(re.escape(Defaults.REDIRECT_PATH_PREFIX) + r'[^/]+')

application: Application | None = None


def resolve_route(path: str) -> dict[str, RouteHandler] | None:
    """Return the handlers of a path keyed by HTTP method, None for unknown paths."""
    if path == '/shorten':
        return {'POST': shorten_url.handle}
    if path == '/metrics/top-domains':
        return {'GET': top_domains.handle}
    if REDIRECT_PATH.fullmatch(path):
        return {'GET': redirect_url.handle}
    return None


def route(event: LambdaEvent, context: LambdaContext, application: Application) -> LambdaResponse:
    """Dispatch an API Gateway event to the handler of its route

    HTTP responses (besides those of the route handlers):
        404: no route matches the path
        405: the path exists but not for this HTTP method
    """
    path = event.get('path') or '/'
    method = (event.get('httpMethod') or 'GET').upper()

    handlers = resolve_route(path)
    if handlers is None:
        logger.info('No route for path. Responding with 404.', extra={'path': path, 'event': ROUTE_NOT_FOUND})
        return response_404(error_code=ROUTE_NOT_FOUND)

    handler = handlers.get(method)
    if handler is None:
        logger.info(
            'Method not allowed for path. Responding with 405.',
            extra={'path': path, 'method': method, 'event': METHOD_NOT_ALLOWED},
        )
        return response_405(allowed=sorted(handlers), error_code=METHOD_NOT_ALLOWED)

    return handler(event, context, application)


def bootstrap() -> Application:
    """Initialize logging, load configuration and build the Application."""
    initialize_logging()
    config = resolve_config(LAMBDA_NAME)
    logger.info('Initializing application.', extra={'appName': app_name(), 'appEnv': app_env()})
    return create_application(config)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests

    Args:
        event (dict):
            API Gateway event payload in Lambda Proxy format.
        context (Any):
            AWS Lambda context object containing runtime information.

    Returns:
        dict: API Gateway-compatible response.

    Example:
        >>> event = {'httpMethod': 'POST', 'path': '/shorten', 'body': '{"url": "https://example.com"}'}
        >>> lambda_handler(event, None)['statusCode']
        200
    """
    global application
    if application is None:
        application = bootstrap()
    return route(event, context, application)
