from starlette.middleware.base import BaseHTTPMiddleware

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET",
}


def apply_cors_headers(response):
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


class WidgetCorsMiddleware(BaseHTTPMiddleware):
    """Stamp permissive GET-only CORS headers on every response, Origin or not.

    The widget is embedded in third-party pages (Notion embeds, dashboards)
    that do not always send an Origin header.
    """

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        return apply_cors_headers(response)
