"""Flask application exposing the extraction pipeline and the order proxy."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request, send_from_directory, url_for
from werkzeug.exceptions import HTTPException

from . import factory
from .config import Settings, load_settings
from .errors import PipelineError
from .ingestion.exporters import CsvExportStore
from .models import ExtractionRequest
from .orders import MIN_ORDER_LEADS, OrderService
from .pipeline import ResultPipeline

LOGGER = logging.getLogger(__name__)


class ServiceRegistry:
    """Builds provider-backed services on first use.

    A missing provider credential therefore only fails the routes that need
    that provider, not the whole application.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        pipeline: Optional[ResultPipeline] = None,
        orders: Optional[OrderService] = None,
        export_store: Optional[CsvExportStore] = None,
    ) -> None:
        self.settings = settings
        self._pipeline = pipeline
        self._orders = orders
        self._export_store = export_store

    @property
    def pipeline(self) -> ResultPipeline:
        if self._pipeline is None:
            self._pipeline = factory.build_pipeline(self.settings)
        return self._pipeline

    @property
    def orders(self) -> OrderService:
        if self._orders is None:
            self._orders = factory.build_order_service(self.settings)
        return self._orders

    @property
    def export_store(self) -> CsvExportStore:
        if self._export_store is None:
            self._export_store = factory.build_export_store(self.settings)
        return self._export_store


def _request_values() -> Dict[str, Any]:
    """Merge query-string parameters with a JSON body; the body wins."""

    values: Dict[str, Any] = dict(request.args.items())
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        values.update(body)
    return values


def create_app(
    settings: Optional[Settings] = None,
    *,
    pipeline: Optional[ResultPipeline] = None,
    orders: Optional[OrderService] = None,
    export_store: Optional[CsvExportStore] = None,
) -> Flask:
    settings = settings or load_settings()
    services = ServiceRegistry(settings, pipeline=pipeline, orders=orders, export_store=export_store)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.extensions["lead_extractor"] = services

    @app.errorhandler(PipelineError)
    def handle_pipeline_error(exc: PipelineError):
        LOGGER.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.path, exc)
        return jsonify({"error": exc.message}), exc.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        LOGGER.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": str(exc) or "Proxy request failed"}), 500

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.post("/run")
    def start_run():
        body = request.get_json(silent=True) or {}
        if not isinstance(body, dict):
            body = {}
        extraction = ExtractionRequest.from_payload(body, platform=request.args.get("platform"))
        records = services.pipeline.run(extraction)

        response: Dict[str, Any] = {"data": [record.to_dict() for record in records]}
        if body.get("export"):
            filename = services.export_store.save(records)
            response["download"] = url_for("download_export", filename=filename)
        return jsonify(response)

    @app.get("/run/<run_id>")
    def run_status(run_id: str):
        return jsonify({"data": services.pipeline.describe_run(run_id)})

    @app.get("/run/<run_id>/dataset")
    def run_dataset(run_id: str):
        try:
            return jsonify(services.pipeline.fetch_dataset(run_id))
        except PipelineError as exc:
            LOGGER.warning("Failed to fetch dataset for run %s: %s", run_id, exc)
            return jsonify({"error": exc.message or "Failed to fetch dataset"}), 500

    @app.post("/orders/create")
    def create_order():
        values = _request_values()
        max_leads = values.get("maxLeads")
        if max_leads is None:
            max_leads = values.get("max_leads")
        order = services.orders.create(
            values.get("taskSource") or values.get("source"),
            values.get("taskType") or values.get("source_type"),
            MIN_ORDER_LEADS if max_leads is None else max_leads,
        )
        return jsonify(order.to_dict())

    @app.get("/orders/list")
    def list_orders():
        return jsonify(services.orders.list(request.args.get("page", 1)))

    @app.get("/orders/<order_id>")
    def order_status(order_id: str):
        return jsonify(services.orders.status(order_id).to_dict())

    @app.get("/orders/<order_id>/download")
    def download_order(order_id: str):
        return jsonify({"data": services.orders.download(order_id)})

    @app.get("/downloads/<path:filename>")
    def download_export(filename: str):
        directory = services.export_store.directory.resolve()
        return send_from_directory(directory, filename, as_attachment=True, mimetype="text/csv")

    return app


__all__ = ["ServiceRegistry", "create_app"]
