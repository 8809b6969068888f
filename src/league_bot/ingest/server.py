import logging

from flask import Flask, Response, request

from league_bot.domain.result import errors_of
from league_bot.ingest.merger import UpdateMerger, parse_updates

logger = logging.getLogger(__name__)


def create_ingest_app(merger: UpdateMerger) -> Flask:
    """Create the Flask app the game backend pushes updates to.

    POST /update accepts one update object ``{type, player?, team?, stats}``
    or a list of them and always acknowledges a JSON body with 200; units
    that cannot be applied are logged and skipped. A non-JSON body gets 400.
    GET / is a liveness check for uptime pingers.
    """
    app = Flask(__name__)

    @app.route("/")
    def alive() -> Response:
        return Response("Bot is alive!", mimetype="text/plain")

    @app.route("/update", methods=["POST"])
    def update() -> tuple[Response, int]:
        body = request.get_json(silent=True)
        if body is None:
            return Response("Expected a JSON body", mimetype="text/plain"), 400

        results = merger.apply_all(parse_updates(body))
        ignored = errors_of(results)
        logger.debug("Ingested %d updates (%d ignored)", len(results), len(ignored))
        return Response("OK", mimetype="text/plain"), 200

    return app
