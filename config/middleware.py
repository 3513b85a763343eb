"""
Custom middleware for classroll-back.
"""
import logging
import time

from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)


class RequestTimingMiddleware(MiddlewareMixin):
    """
    Measure request latency; expose it as X-Latency-Ms and log API calls at debug level.
    """
    API_PREFIX = '/api/'

    def process_request(self, request):
        request._started_at = time.perf_counter()

    def process_response(self, request, response):
        started_at = getattr(request, '_started_at', None)
        if started_at is None:
            return response
        latency_ms = int((time.perf_counter() - started_at) * 1000)
        response['X-Latency-Ms'] = str(latency_ms)
        if request.path.startswith(self.API_PREFIX):
            logger.debug(
                '%s %s -> %s (%sms)',
                request.method, request.path, response.status_code, latency_ms,
            )
        return response
