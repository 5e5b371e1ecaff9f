import logging
import time


class RequestLoggingMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response
        self.logger = logging.getLogger("django.request")

    def __call__(self, request):
        client_ip = request.META.get("HTTP_X_FORWARDED_FOR", "").split(",")[0].strip() or request.META.get("REMOTE_ADDR")
        method = request.method
        path = request.get_full_path()
        start = time.time()
        response = self.get_response(request)
        elapsed_ms = (time.time() - start) * 1000
        self.logger.info(f"[REQ] {method} {path} from {client_ip} -> {response.status_code} ({elapsed_ms:.0f}ms)")
        return response
