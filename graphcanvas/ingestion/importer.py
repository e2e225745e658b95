"""
CSV node and edge import with replace/append merge.

Importing is split in two steps so the caller can ask the user how to merge:

1. ``plan_node_import`` / ``plan_edge_import`` parse the payload, infer
   column roles from the headers and build candidate entities.
2. ``NodeImportPlan.apply`` / ``EdgeImportPlan.apply`` merge the candidates
   into a Visual Model under a ``MergePolicy`` and return a new model.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from graphcanvas.core.config import ImportSettings, get_settings
from graphcanvas.core.schemas import Outcome, Position, VisualEdge, VisualModel, VisualNode
from graphcanvas.graph.styles import default_edge_style, default_node_style, placeholder_node_style
from graphcanvas.ingestion.csv_parser import ParsedTable, find_column_index, parse_csv

logger = logging.getLogger(__name__)

NO_VALID_DATA = "No valid data found in the file."


class MergePolicy(str, Enum):
    """How imported entities combine with what is already on the canvas."""
    REPLACE = "replace"   # clear the canvas, keep only imported data
    APPEND = "append"     # keep everything, add what is new


def _scatter(rng: random.Random, width: float, height: float) -> Position:
    return Position(x=(rng.random() - 0.5) * width, y=(rng.random() - 0.5) * height)


# ============================================================
# Nodes
# ============================================================

@dataclass
class NodeImportPlan:
    """Deduplicated node candidates from one CSV file."""
    candidates: list[VisualNode] = field(default_factory=list)
    id_column: int = 0
    label_column: int = 1
    skipped_rows: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.candidates

    def apply(self, model: VisualModel, policy: MergePolicy) -> Outcome:
        """
        Merge the candidates into ``model``.

        REPLACE makes the candidates the whole node set and discards every
        edge. APPEND adds candidates whose id is new and keeps the rest.
        """
        if self.is_empty:
            return Outcome.empty(model, NO_VALID_DATA)

        if policy == MergePolicy.REPLACE:
            new_model = model.replace(nodes=self.candidates, edges=())
            logger.info(f"Node import replaced canvas with {len(self.candidates)} nodes")
            return Outcome.success(new_model, f"Canvas reset; imported {len(self.candidates)} nodes.")

        new_model = model.add_nodes(self.candidates)
        added = len(new_model.nodes) - len(model.nodes)
        logger.info(f"Node import appended {added} of {len(self.candidates)} candidates")
        return Outcome.success(new_model, f"Appended {added} new node(s).")


def plan_node_import(
    text: str,
    settings: ImportSettings | None = None,
    rng: random.Random | None = None,
) -> NodeImportPlan:
    """
    Build node candidates from a CSV payload.

    Rows without an id are skipped; a repeated id keeps its first row. The
    label falls back to the id when its cell is empty.
    """
    settings = settings or get_settings().importing
    rng = rng or random.Random()
    table = parse_csv(text)

    id_idx = find_column_index(table.headers, settings.node_id_terms, 0)
    label_idx = find_column_index(table.headers, settings.node_label_terms, 1)

    plan = NodeImportPlan(id_column=id_idx, label_column=label_idx)
    seen: set[str] = set()
    for row in table.rows:
        node_id = table.cell(row, id_idx)
        if not node_id or node_id in seen:
            plan.skipped_rows += 1
            continue
        seen.add(node_id)
        plan.candidates.append(VisualNode(
            id=node_id,
            label=table.cell(row, label_idx) or node_id,
            position=_scatter(rng, settings.node_scatter_width, settings.node_scatter_height),
            style=default_node_style(),
        ))

    if plan.skipped_rows:
        logger.debug(f"Node import skipped {plan.skipped_rows} rows (empty or repeated id)")
    return plan


# ============================================================
# Edges
# ============================================================

@dataclass
class EdgeRow:
    source: str
    target: str
    label: str = ""


@dataclass
class EdgeImportPlan:
    """Edge candidates from one CSV file, in file order, duplicates kept."""
    rows: list[EdgeRow] = field(default_factory=list)
    source_column: int = 0
    target_column: int = 1
    label_column: int = 2
    skipped_rows: int = 0
    rng: random.Random = field(default_factory=random.Random, repr=False)
    settings: ImportSettings | None = field(default=None, repr=False)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def referenced_ids(self) -> list[str]:
        """Every node id named by a row, first mention first."""
        ordered: dict[str, None] = {}
        for row in self.rows:
            ordered.setdefault(row.source)
            ordered.setdefault(row.target)
        return list(ordered)

    def apply(self, model: VisualModel, policy: MergePolicy) -> Outcome:
        """
        Merge the edges into ``model``, creating placeholder nodes as needed.

        REPLACE drops all prior nodes and edges; the result holds only the
        new edges and a placeholder for every referenced id. APPEND keeps the
        canvas, adds placeholders for ids not on it yet and appends every
        edge.
        """
        if self.is_empty:
            return Outcome.empty(model, NO_VALID_DATA)

        settings = self.settings or get_settings().importing
        base = model.replace(nodes=(), edges=()) if policy == MergePolicy.REPLACE else model

        placeholders = [
            VisualNode(
                id=node_id,
                label=node_id,
                position=_scatter(self.rng, settings.placeholder_scatter_width,
                                  settings.placeholder_scatter_height),
                data={"placeholder": True},
                style=placeholder_node_style(),
            )
            for node_id in self.referenced_ids()
            if not base.has_node(node_id)
        ]
        new_model = base.add_nodes(placeholders)

        edges = []
        for row in self.rows:
            edge_id, new_model = new_model.allocate_id("csv-e")
            edges.append(VisualEdge(id=edge_id, source=row.source, target=row.target,
                                    label=row.label, style=default_edge_style()))
        new_model = new_model.add_edges(edges)

        logger.info(
            f"Edge import ({policy.value}): {len(edges)} edges, {len(placeholders)} placeholder nodes"
        )
        if policy == MergePolicy.REPLACE:
            message = f"Canvas reset: created {len(placeholders)} nodes and {len(edges)} edges."
        elif placeholders:
            message = f"Appended {len(edges)} edge(s); added {len(placeholders)} missing node(s)."
        else:
            message = f"Appended {len(edges)} edge(s)."
        return Outcome.success(new_model, message)


def plan_edge_import(
    text: str,
    settings: ImportSettings | None = None,
    rng: random.Random | None = None,
) -> EdgeImportPlan:
    """
    Build edge candidates from a CSV payload.

    Rows missing a source or target are skipped. Every other row becomes an
    edge, so repeated source/target pairs yield parallel edges.
    """
    settings = settings or get_settings().importing
    table = parse_csv(text)

    plan = EdgeImportPlan(
        source_column=find_column_index(table.headers, settings.edge_source_terms, 0),
        target_column=find_column_index(table.headers, settings.edge_target_terms, 1),
        label_column=find_column_index(table.headers, settings.edge_label_terms, 2),
        rng=rng or random.Random(),
        settings=settings,
    )
    _collect_edge_rows(table, plan)
    return plan


def _collect_edge_rows(table: ParsedTable, plan: EdgeImportPlan) -> None:
    for row in table.rows:
        source = table.cell(row, plan.source_column)
        target = table.cell(row, plan.target_column)
        if not source or not target:
            plan.skipped_rows += 1
            continue
        plan.rows.append(EdgeRow(source=source, target=target,
                                 label=table.cell(row, plan.label_column)))

    if plan.skipped_rows:
        logger.debug(f"Edge import skipped {plan.skipped_rows} rows without source/target")
