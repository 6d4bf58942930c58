"""
Best-first extraction of the highest-probability winning assignments.

Probability never increases along a path, so popping the frontier in
descending probability order yields accepted terminals in descending order
too. The stopping rule below is what makes the top K exact.
"""

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Optional, Sequence

from revenue_paths.models.opportunity import Opportunity, Outcome

from .counting import SuffixBounds
from .resolver import Selections, branch_factor, viable_outcomes
from .types import ROOT_ID, DecisionTree, TreeNode

DEFAULT_TOP_K = 20


@dataclass(order=True)
class _FrontierItem:
    """Pending expansion; the tree node is created only when popped."""

    sort_key: tuple[float, int]
    index: int = field(compare=False)
    probability: float = field(compare=False)
    revenue: float = field(compare=False)
    resolved: dict[str, Outcome] = field(compare=False)
    parent: Optional[TreeNode] = field(compare=False)
    opportunity: Optional[Opportunity] = field(compare=False, default=None)
    outcome: Optional[Outcome] = field(compare=False, default=None)


def build_path_tree(
    opportunities: Sequence[Opportunity],
    selections: Selections,
    target: float,
    starting_revenue: float = 0.0,
    top_k: int = DEFAULT_TOP_K,
) -> DecisionTree:
    """
    Build a minimal tree holding the top_k most probable winning assignments.

    Terminals are returned in non-increasing probability order. Equal
    probabilities pop in insertion order (win before loss, shallower first).
    """
    if top_k < 1:
        raise ValueError(f"top_k must be >= 1, got {top_k}")

    opps = list(opportunities)
    bounds = SuffixBounds.compute(opps, selections)
    counter = itertools.count()

    def push(frontier: list, item_kwargs: dict) -> None:
        seq = next(counter)
        heapq.heappush(
            frontier,
            _FrontierItem(sort_key=(-item_kwargs["probability"], seq), **item_kwargs),
        )

    root: Optional[TreeNode] = None
    nodes: dict[str, TreeNode] = {}
    accepted: list[TreeNode] = []
    frontier: list[_FrontierItem] = []
    push(
        frontier,
        {"index": 0, "probability": 1.0, "revenue": starting_revenue, "resolved": {}, "parent": None},
    )

    while frontier:
        if len(accepted) >= top_k:
            worst = min(node.probability for node in accepted)
            if frontier[0].probability <= worst:
                break

        item = heapq.heappop(frontier)
        if bounds.infeasible(item.index, item.revenue, target):
            continue

        node = _materialize(item)
        nodes[node.id] = node
        if item.parent is None:
            root = node
        else:
            item.parent.children.append(node)

        if item.revenue >= target:
            node.is_terminal = True
            node.result = "success"
            accepted.append(node)
            continue
        if item.index >= len(opps):
            continue

        opp = opps[item.index]
        for outcome in viable_outcomes(opp, selections):
            push(
                frontier,
                {
                    "index": item.index + 1,
                    "probability": item.probability * branch_factor(opp, outcome),
                    "revenue": item.revenue + opp.value if outcome == "win" else item.revenue,
                    "resolved": {**item.resolved, opp.id: outcome},
                    "parent": node,
                    "opportunity": opp,
                    "outcome": outcome,
                },
            )

    accepted.sort(key=lambda n: n.probability, reverse=True)
    accepted = accepted[:top_k]

    if root is None:
        # Root itself was infeasible: nothing can reach the target.
        root = TreeNode(
            id=ROOT_ID,
            depth=0,
            revenue=starting_revenue,
            probability=1.0,
            is_terminal=True,
            result="failure",
        )
        return DecisionTree(root=root, nodes=[root], terminals=[])

    _prune_to_ancestors(root, nodes, accepted)
    return DecisionTree(root=root, nodes=list(root.walk()), terminals=accepted)


def _materialize(item: _FrontierItem) -> TreeNode:
    if item.parent is None:
        node_id = ROOT_ID
    else:
        node_id = item.parent.child_id(item.opportunity, item.outcome)
    return TreeNode(
        id=node_id,
        depth=item.index,
        revenue=item.revenue,
        probability=item.probability,
        resolved=item.resolved,
        opportunity=item.opportunity,
        outcome=item.outcome,
        parent_id=item.parent.id if item.parent else None,
    )


def _prune_to_ancestors(root: TreeNode, nodes: dict[str, TreeNode], accepted: list[TreeNode]) -> None:
    """Drop every node that does not lead to an accepted terminal."""
    keep: set[str] = set()
    for terminal in accepted:
        node: Optional[TreeNode] = terminal
        while node is not None and node.id not in keep:
            keep.add(node.id)
            node = nodes.get(node.parent_id) if node.parent_id else None

    # walk() reads children after each node is yielded, so pruned subtrees are skipped.
    for node in root.walk():
        node.children = [c for c in node.children if c.id in keep]
