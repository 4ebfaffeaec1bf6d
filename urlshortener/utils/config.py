"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to
access configuration data. In AWS, configuration is stored in **AWS AppConfig**
as a single JSON document shared by all functions; each function reads its own
section. Locally (or whenever AppConfig is not wired up), the same section is
built from environment variables.

The AppConfig JSON follows this structure:

    {
        "build": 7,
        "configs": {
            "api": {
                "base_url": "https://sho.rt",
                "top_domains_limit": 3
            }
        }
    }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    default_config() -> dict
        Build a configuration section from environment variables.

    validate_config(config: dict) -> dict
        Check configuration values, raise BadConfigurationError if invalid.

    load_config(lambda_name: str) -> dict
        Load configuration for a given Lambda from AWS AppConfig.

    resolve_config(lambda_name: str) -> dict
        Load from AppConfig when configured, else fall back to default_config().

Example:
    Typical usage inside a Lambda handler:

        >>> from urlshortener.utils.config import resolve_config
        >>> config = resolve_config('api')
        >>> config['top_domains_limit']
        3
"""

import os
import json
import logging

import boto3

from urlshortener.types import AppConfig, AppConfigDataClient, LambdaConfiguration
from urlshortener.constants import ENV, Defaults
from urlshortener.exceptions import BadConfigurationError
from urlshortener.utils.helpers import require_environment
from urlshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)

APPCONFIG_ENVIRONMENT = (ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def default_config() -> dict:
    """Build a configuration section from environment variables

    Environment variables used:
        BASE_URL            – Public base URL of short links (optional; derived from the request if unset).
        TOP_DOMAINS_LIMIT   – Number of domains reported by the metrics endpoint (default: 3).

    Returns:
        dict: configuration section with the same keys as an AppConfig section.

    Raises:
        BadConfigurationError:
            If TOP_DOMAINS_LIMIT is not an integer.
    """
    raw_limit = os.environ.get(ENV.App.TOP_DOMAINS_LIMIT, str(Defaults.TOP_DOMAINS_LIMIT))
    try:
        top_domains_limit = int(raw_limit)
    except ValueError as e:
        raise BadConfigurationError(f'{ENV.App.TOP_DOMAINS_LIMIT} must be an integer (given value: {raw_limit!r}).') from e

    return {
        'base_url': os.environ.get(ENV.App.BASE_URL) or None,
        'top_domains_limit': top_domains_limit,
    }


def validate_config(config: LambdaConfiguration) -> LambdaConfiguration:
    """Check a configuration section

    Args:
        config (dict):
            Section with optional 'base_url' and 'top_domains_limit' keys.

    Returns:
        dict: the section with defaults filled in.

    Raises:
        BadConfigurationError:
            If 'top_domains_limit' is not a positive integer or 'base_url'
            is not an http(s) URL.
    """
    base_url = config.get('base_url')
    top_domains_limit = config.get('top_domains_limit', Defaults.TOP_DOMAINS_LIMIT)

    if isinstance(top_domains_limit, bool) or not isinstance(top_domains_limit, int) or top_domains_limit <= 0:
        raise BadConfigurationError(f'top_domains_limit must be a positive integer (given value: {top_domains_limit!r}).')
    if base_url is not None and not (isinstance(base_url, str) and base_url.startswith(('http://', 'https://'))):
        raise BadConfigurationError(f'base_url must be an http(s) URL (given value: {base_url!r}).')

    return {
        'base_url': base_url.rstrip('/') if base_url else None,
        'top_domains_limit': top_domains_limit,
    }


@require_environment(*APPCONFIG_ENVIRONMENT)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function.

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "api").

    Returns:
        dict: The lambda's config section as a Python dictionary.

    Raises:
        MissingEnvironmentVariableError:
            If any of the AppConfig identifiers is not set.
        botocore.exceptions.ClientError:
            If AppConfig rejects the request.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig: AppConfigDataClient = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    config: AppConfig = json.loads(content.decode('utf-8'))

    data = config['configs'][lambda_name]
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
    return data


def resolve_config(lambda_name: str) -> LambdaConfiguration:
    """Return the validated configuration section for a Lambda

    AppConfig is used when not running locally and all AppConfig identifiers
    are set. Otherwise the section is built from environment variables.

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "api").

    Returns:
        dict: validated configuration section.
    """
    appconfig_ready = all(os.environ.get(name) for name in APPCONFIG_ENVIRONMENT)
    if running_locally() or not appconfig_ready:
        logger.debug('Using configuration from environment variables.', extra={'lambdaName': lambda_name})
        return validate_config(default_config())
    return validate_config(load_config(lambda_name))
