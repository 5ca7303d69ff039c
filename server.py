"""Entry point for the document search HTTP service."""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import parse_qs, urlparse

from config_loader import load_config
from corpus_loader import build_engine, parse_status
from indexer import DocumentStatus, UnknownDocumentError
from search_engine import SearchEngine
from text_processing import InvalidQueryError

LOGGER = logging.getLogger("search_service")

API_PREFIX = "/api/v1"


class SearchRequestHandler(BaseHTTPRequestHandler):
    """HTTP handler exposing health, search, match and document listing endpoints."""

    engine: SearchEngine
    logger: logging.Logger

    def do_GET(self) -> None:
        parsed = urlparse(self.path)
        path = parsed.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        query_params = parse_qs(parsed.query, keep_blank_values=True)

        if path == "/health":
            self._send_json(HTTPStatus.OK, {"status": "ok"})
            return

        handlers = {
            "/search": self._handle_search,
            "/match": self._handle_match,
            "/documents": self._handle_documents,
        }
        handler = handlers.get(path)
        if handler is None:
            self._send_json(
                HTTPStatus.NOT_FOUND,
                {"error": "Not found", "message": "Use GET /search?q=<text>"},
            )
            return

        try:
            handler(query_params)
        except Exception as exc:
            self.logger.exception("Request failed: %s", self.path)
            self._send_json(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                {"error": "internal server error", "details": str(exc)},
            )

    def _handle_search(self, query_params: dict[str, list[str]]) -> None:
        query = _first_param(query_params, "q")
        if not query.strip():
            self._send_json(HTTPStatus.BAD_REQUEST, {"error": "Missing query parameter 'q'"})
            return

        status_raw = _first_param(query_params, "status") or DocumentStatus.ACTUAL.name
        try:
            status = parse_status(status_raw)
        except ValueError as exc:
            self._send_json(HTTPStatus.BAD_REQUEST, {"error": str(exc)})
            return

        try:
            results = self.engine.find_top_documents(query, status)
        except InvalidQueryError as exc:
            self._send_json(HTTPStatus.BAD_REQUEST, {"error": "Invalid query", "details": str(exc)})
            return

        items = [
            {"id": item.id, "relevance": item.relevance, "rating": item.rating}
            for item in results
        ]
        self._send_json(
            HTTPStatus.OK,
            {
                "query": query,
                "status": status.name.lower(),
                "total": len(items),
                "items": items,
            },
        )

    def _handle_match(self, query_params: dict[str, list[str]]) -> None:
        query = _first_param(query_params, "q")
        if not query.strip():
            self._send_json(HTTPStatus.BAD_REQUEST, {"error": "Missing query parameter 'q'"})
            return

        try:
            document_id = int(_first_param(query_params, "id").strip())
        except ValueError:
            self._send_json(HTTPStatus.BAD_REQUEST, {"error": "Invalid query parameter 'id'"})
            return

        try:
            words, status = self.engine.match_document(query, document_id)
        except UnknownDocumentError:
            self._send_json(HTTPStatus.NOT_FOUND, {"error": f"Unknown document id {document_id}"})
            return
        except InvalidQueryError as exc:
            self._send_json(HTTPStatus.BAD_REQUEST, {"error": "Invalid query", "details": str(exc)})
            return

        self._send_json(
            HTTPStatus.OK,
            {
                "query": query,
                "document_id": document_id,
                "words": words,
                "status": status.name.lower(),
            },
        )

    def _handle_documents(self, _query_params: dict[str, list[str]]) -> None:
        count = self.engine.get_document_count()
        ids = [self.engine.get_document_id(ordinal) for ordinal in range(count)]
        self._send_json(HTTPStatus.OK, {"total": count, "ids": ids})

    def _send_json(self, status: HTTPStatus, payload: dict[str, object]) -> None:
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        self.send_response(status.value)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: object) -> None:
        self.logger.info("%s - %s", self.client_address[0], format % args)


def _first_param(query_params: dict[str, list[str]], name: str) -> str:
    return (query_params.get(name) or [""])[0]


def main() -> None:
    """Load configuration, index the corpus, and start HTTP server."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    base_dir = Path(__file__).resolve().parent
    config = load_config(base_dir / "config.yml")

    SearchRequestHandler.engine = build_engine(config, LOGGER)
    SearchRequestHandler.logger = LOGGER

    server_address = (config.host, config.port)
    httpd = ThreadingHTTPServer(server_address, SearchRequestHandler)

    LOGGER.info("Search service started on http://%s:%d", config.host, config.port)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        LOGGER.info("Shutdown signal received")
    finally:
        httpd.server_close()
        LOGGER.info("Server stopped")


if __name__ == "__main__":
    main()
