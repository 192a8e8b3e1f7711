"""
CORS middleware whose pre-flight answers carry no body.
"""
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers
from starlette.responses import Response


class PreflightCORSMiddleware(CORSMiddleware):
    """
    Starlette's CORSMiddleware, except that an accepted pre-flight request
    gets an empty 200 response instead of a plain-text "OK".
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers=request_headers)
        if response.status_code != 200:
            return response

        headers = {
            key: value
            for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)
