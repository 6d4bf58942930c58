"""Result types produced by the path engine."""

from dataclasses import dataclass, field
from typing import Literal, Optional

from revenue_paths.models.opportunity import Opportunity, Outcome

NodeResult = Literal["success", "failure"]

ROOT_ID = "root"


@dataclass
class TreeNode:
    """One decision point along a scenario path."""

    id: str
    depth: int
    revenue: float
    probability: float
    resolved: dict[str, Outcome] = field(default_factory=dict)
    opportunity: Optional[Opportunity] = None
    outcome: Optional[Outcome] = None
    parent_id: Optional[str] = None
    is_terminal: bool = False
    result: Optional[NodeResult] = None
    children: list["TreeNode"] = field(default_factory=list)

    def child_id(self, opportunity: Opportunity, outcome: Outcome) -> str:
        """Path-unique id for the child taking outcome on opportunity."""
        return f"{self.id}/{opportunity.id}:{outcome}"

    def walk(self):
        """Yield this node and its descendants, pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict:
        """JSON-friendly view; the opportunity is reduced to its id and name."""
        return {
            "id": self.id,
            "depth": self.depth,
            "revenue": self.revenue,
            "probability": self.probability,
            "resolved": dict(self.resolved),
            "opportunity_id": self.opportunity.id if self.opportunity else None,
            "opportunity_name": self.opportunity.name if self.opportunity else None,
            "outcome": self.outcome,
            "parent_id": self.parent_id,
            "is_terminal": self.is_terminal,
            "result": self.result,
            "children": [c.to_dict() for c in self.children],
        }


@dataclass
class DecisionTree:
    """A built tree: root, all nodes pre-order, and accepted terminals."""

    root: TreeNode
    nodes: list[TreeNode]
    terminals: list[TreeNode]

    def to_dict(self) -> dict:
        return {
            "root": self.root.to_dict(),
            "node_count": len(self.nodes),
            "terminals": [
                {"id": t.id, "revenue": t.revenue, "probability": t.probability, "resolved": dict(t.resolved)}
                for t in self.terminals
            ],
        }


@dataclass(frozen=True)
class PathCounts:
    """Exact success/failure split over all win/loss assignments."""

    success: int
    failure: int

    @property
    def total(self) -> int:
        return self.success + self.failure

    @property
    def percent_success(self) -> float:
        total = self.total
        return self.success / total * 100 if total else 0.0

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "failure": self.failure,
            "total": self.total,
            "percent_success": self.percent_success,
        }
