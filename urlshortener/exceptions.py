class URLShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:urlshortener_error'


class ValidationError(URLShortenerError):
    """Raised when a URL submitted for shortening is rejected."""

    error_code = 'app:validation_error'


class ConfigurationError(URLShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
