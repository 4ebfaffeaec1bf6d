import logging

from urlshortener.application import Application
from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.constants import Defaults, TOP_DOMAINS_SUCCESS
from urlshortener.lambdas.responses import response_200


logger = logging.getLogger(__name__)


def handle(event: LambdaEvent, context: LambdaContext, application: Application) -> LambdaResponse:
    """Handle GET /metrics/top-domains

    HTTP responses:
        200: JSON array of {"domain": str, "count": int}, most shortened first

    Example:
        >>> response = handle({}, None, application)
        >>> json.loads(response['body'])
        [{'domain': 'example.com', 'count': 2}, {'domain': 'test.com', 'count': 1}]
    """
    limit = application.config.get('top_domains_limit', Defaults.TOP_DOMAINS_LIMIT)
    domains = application.shortener.top_domains(limit)
    logger.debug('Reporting top domains.', extra={'limit': limit, 'event': TOP_DOMAINS_SUCCESS})
    return response_200([domain.to_dict() for domain in domains])
