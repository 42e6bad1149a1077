"""Flask HTTP interface: serves new log content to polling clients."""

import base64
import binascii
import logging
from urllib.parse import unquote

from flask import Flask, jsonify

from log_server.config import Config
from log_server.reader import IncrementalLogReader

logger = logging.getLogger(__name__)


class PathDecodeError(ValueError):
    """Raised when a path from the URL cannot be decoded."""


def decode_path(raw: str) -> str:
    """Decode a percent-encoded, URL-safe base64 encoded UTF-8 path."""
    encoded = unquote(raw)
    # altchars only translates, so the standard "+" and "/" would still pass
    if "+" in encoded or "/" in encoded:
        raise PathDecodeError("unable to decode path")
    try:
        path_bytes = base64.b64decode(encoded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise PathDecodeError("unable to decode path") from e
    try:
        return path_bytes.decode("utf-8")
    except UnicodeDecodeError as e:
        raise PathDecodeError("invalid characters within path") from e


def create_app(config: Config | None = None, reader: IncrementalLogReader | None = None) -> Flask:
    config = config or Config()
    if reader is None:
        reader = IncrementalLogReader(ttl_seconds=config.state_ttl_seconds, verbose=config.verbose)

    app = Flask(__name__)
    app.config["READER"] = reader

    @app.route("/log/<path>/<retrieval_key>")
    def log(path, retrieval_key):
        try:
            decoded = decode_path(path)
        except PathDecodeError as e:
            if config.verbose:
                logger.info("%s - %s", e, e.__cause__)
            return str(e), 400, {"Content-Type": "text/plain; charset=utf-8"}

        result = reader.read_file(decoded, retrieval_key)
        content = result.content
        return jsonify(
            success=result.success,
            length=len(content.encode("utf-8")) if content is not None else 0,
            data=content,
            next_key=result.next_key,
            error=result.error.value if result.error else None,
        )

    @app.route("/health")
    def health():
        return jsonify(status="ok", active_sessions=reader.active_sessions)

    return app


def run_server(app: Flask, host: str, port: int):
    """Run the Flask app with one thread per request."""
    app.run(host=host, port=port, threaded=True, use_reloader=False)
