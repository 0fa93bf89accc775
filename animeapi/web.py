from __future__ import annotations

import json

from flask import Flask, Response, request

from animeapi.config import settings
from animeapi.errors import OperationNotSupported, ProviderNotFound, SourceUnavailable
from animeapi.log import configure_logging, get_logger
from animeapi.models import to_dict
from animeapi.providers import ProviderRegistry
from animeapi.result import Result

logger = get_logger(__name__)

app = Flask(__name__)
registry = ProviderRegistry()

LISTINGS = {
    "latest-episodes": "latest_episodes",
    "airing": "currently_airing",
    "latest-additions": "latest_additions",
}


def json_response(payload, status: int = 200) -> Response:
    body = json.dumps(payload, indent=2, ensure_ascii=False)
    return Response(body, status=status, mimetype="application/json")


def result_response(result: Result) -> Response:
    if result.ok:
        return json_response(to_dict(result.value))
    # the body stays the bare sentinel; only the status tells the failure kind
    status = 503 if isinstance(result.error, SourceUnavailable) else 502
    return json_response(result.unwrap_or_sentinel(), status)


def call(provider_id: str, operation: str, *args) -> Response:
    try:
        provider = registry.get(provider_id)
        return result_response(getattr(provider, operation)(*args))
    except (ProviderNotFound, OperationNotSupported) as e:
        return json_response({"error": str(e)}, 404)


@app.after_request
def log_request(response: Response) -> Response:
    logger.info("{} {} {}", request.method, request.path, response.status_code)
    return response


@app.route("/")
def index():
    return json_response({"providers": [p.describe() for p in registry.all()]})


@app.route("/anime/<provider>/list/<listing>")
def listing(provider: str, listing: str):
    operation = LISTINGS.get(listing)
    if operation is None:
        return json_response({"error": f"unknown listing {listing!r}"}, 404)
    return call(provider, operation)


@app.route("/anime/<provider>/episode/<path:path>")
def episode(provider: str, path: str):
    return call(provider, "episode", path)


@app.route("/anime/<provider>/<slug>")
def anime(provider: str, slug: str):
    return call(provider, "anime", slug)


def run(host: str | None = None, port: int | None = None):
    configure_logging()
    host = host or settings.server.host
    port = port or settings.server.port
    logger.info("Server running on http://{}:{}", host, port)
    app.run(host=host, port=port, debug=settings.server.debug)


if __name__ == "__main__":
    run()
