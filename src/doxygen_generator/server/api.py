"""API routes - all prefixed with /api."""

import logging
from dataclasses import asdict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from ..config import StyleOptions, load_style
from ..errors import ConfigError
from ..formatting import completion_items, reflow_comment
from ..locate import generate_from_document
from ..schemas import CompleteRequest, GenerateRequest, ReflowRequest

bp = Blueprint("api", __name__, url_prefix="/api")
log = logging.getLogger(__name__)


def _validation_failed(e: ValidationError):
    return jsonify(
        {"error": "validation failed", "details": e.errors(include_context=False)}
    ), 400


def _style(options: dict) -> StyleOptions:
    """App style with per-request options layered on top."""
    base: StyleOptions = current_app.config["STYLE"]
    if not options:
        return base
    return load_style({**base.model_dump(), **options}, environ={})


@bp.get("/health")
def health():
    return jsonify({"status": "ok"})


@bp.post("/generate")
def generate():
    try:
        data = GenerateRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _validation_failed(e)

    try:
        style = _style(data.options)
    except ConfigError as e:
        log.warning(f"Rejected style options: {e}")
        return jsonify({"error": str(e), "field": e.field}), 400

    result = generate_from_document(data.text, data.line, style)
    name = result.declaration.name if result.declaration else None
    log.info(f"Generated comment: line={data.line} anchor={result.anchor.kind} name={name}")

    return jsonify(
        {
            "snippet": result.snippet,
            "anchor": asdict(result.anchor),
            "declaration": asdict(result.declaration) if result.declaration else None,
        }
    )


@bp.post("/complete")
def complete():
    try:
        data = CompleteRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _validation_failed(e)

    items = completion_items(data.text, data.offset)
    return jsonify({"items": [asdict(item) for item in items]})


@bp.post("/reflow")
def reflow():
    try:
        data = ReflowRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _validation_failed(e)

    width = data.width or current_app.config["STYLE"].wrap_width
    return jsonify({"text": reflow_comment(data.text, width)})
