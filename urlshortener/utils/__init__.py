from urlshortener.utils.config import app_env, app_name, load_config, resolve_config
from urlshortener.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response
from urlshortener.utils.shortener import generate_shortcode, validate_url, extract_domain
from urlshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'validate_url',
    'extract_domain',
    'app_env',
    'app_name',
    'load_config',
    'resolve_config',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
