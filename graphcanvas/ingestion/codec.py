"""
JSON and CSV (de)serialization of the Visual Model.

- JSON export/import keeps every model field: ``{"nodes": [...], "edges": [...]}``
- CSV export writes ``nodes.csv`` (id,label,x,y) and ``edges.csv``
  (source,target,label,id). Values are written as-is: a comma inside a label
  is not quoted and will split the column on re-import.
"""
import json
import logging

from pydantic import TypeAdapter, ValidationError

from graphcanvas.core.schemas import Outcome, VisualEdge, VisualModel, VisualNode

logger = logging.getLogger(__name__)

_NODES = TypeAdapter(list[VisualNode])
_EDGES = TypeAdapter(list[VisualEdge])


class PayloadError(ValueError):
    """Uploaded bytes could not be read as text."""


def decode_payload(raw: bytes) -> str:
    """Decode an uploaded file as UTF-8, tolerating a leading BOM."""
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise PayloadError(f"File is not valid UTF-8 text: {e}") from e


# ── JSON ────────────────────────────────────────────────────────

def export_json(model: VisualModel) -> str:
    payload = {
        "nodes": [n.model_dump(mode="json") for n in model.nodes],
        "edges": [e.model_dump(mode="json") for e in model.edges],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def import_json(text: str, model: VisualModel) -> Outcome:
    """
    Load nodes and/or edges from a JSON export.

    A missing (or null) ``nodes`` or ``edges`` key leaves that collection as it is.
    Malformed JSON or entries that fail validation leave the model untouched.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Rejected JSON import: {e}")
        return Outcome.malformed(model, f"JSON format error: {e.msg} (line {e.lineno})")

    if not isinstance(payload, dict):
        return Outcome.malformed(model, "JSON format error: expected an object with nodes/edges.")

    try:
        # A null collection counts as missing
        nodes = _NODES.validate_python(payload["nodes"]) if payload.get("nodes") is not None else None
        edges = _EDGES.validate_python(payload["edges"]) if payload.get("edges") is not None else None
        new_model = model.replace(nodes=nodes, edges=edges)
    except (ValidationError, ValueError) as e:
        logger.warning(f"Rejected JSON import: {e}")
        return Outcome.malformed(model, f"JSON content is invalid: {e}")

    logger.info(f"JSON import: {len(new_model.nodes)} nodes, {len(new_model.edges)} edges")
    return Outcome.success(new_model, "JSON import succeeded.")


# ── CSV ─────────────────────────────────────────────────────────

def export_nodes_csv(model: VisualModel) -> str:
    rows = [f"{n.id},{n.label},{n.position.x},{n.position.y}" for n in model.nodes]
    return "\n".join(["id,label,x,y"] + rows)


def export_edges_csv(model: VisualModel) -> str:
    rows = [f"{e.source},{e.target},{e.label or ''},{e.id}" for e in model.edges]
    return "\n".join(["source,target,label,id"] + rows)


def export_csv(model: VisualModel) -> tuple[str, str]:
    """Return (nodes.csv, edges.csv) contents."""
    return export_nodes_csv(model), export_edges_csv(model)
