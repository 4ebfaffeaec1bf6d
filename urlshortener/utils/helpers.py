"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected exceptions into a 500 response

Example:
    Typical usage inside a Lambda handler:

        >>> from urlshortener.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "sho.rt",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://sho.rt'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from urlshortener.constants import Defaults, UNKNOWN_INTERNAL_SERVER_ERROR
from urlshortener.exceptions import MissingEnvironmentVariableError
from urlshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def base_url(event: dict[str, Any]) -> str:
    """Extract public base URL from API Gateway event

    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return Defaults.LOCAL_BASE_URL


def get_short_url(shortcode: str, event: dict[str, Any], base: str | None = None) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        event (dict): API Gateway event object passed to Lambda handler
        base (str | None): configured public base URL, derived from the event if None

    Returns:
        str: short url string representation, e.g. 'https://sho.rt/r/m4bHI5oT'
    """
    prefix = (base or base_url(event)).rstrip('/')
    return f'{prefix}{Defaults.REDIRECT_PATH_PREFIX}{shortcode}'


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with 500 instead of letting a Lambda handler crash

    Any exception escaping the handler is logged with its traceback and
    converted into an API Gateway proxy response. When running locally the
    exception is re-raised instead, so SAM shows the traceback.

    Example:
        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
    """

    @functools.wraps(handler)
    def wrapper(*args, **kwargs) -> dict:
        try:
            return handler(*args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in Lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
