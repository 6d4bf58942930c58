"""
Two-tier decomposition: an explicitly branched priority prefix with a
capped combination search over the backlog at each of its leaves.
"""

import logging
from dataclasses import dataclass, field
from typing import Literal, Optional, Sequence

from revenue_paths.models.opportunity import Opportunity, Outcome

from .counting import PathCounter, SuffixBounds
from .paths import build_path_tree
from .resolver import OUTCOMES, Selections, branch_factor, resolved_outcome, viable_outcomes
from .types import ROOT_ID, DecisionTree, TreeNode

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY_SIZE = 8
DEFAULT_BACKLOG_CAP = 6

BacklogStrategy = Literal["first-found", "best-first"]


@dataclass
class Combination:
    """Contiguous decisions from the start of a sequence up to reaching the target."""

    decisions: list[tuple[Opportunity, Outcome]] = field(default_factory=list)
    revenue: float = 0.0
    probability: float = 1.0

    @property
    def won(self) -> list[Opportunity]:
        return [opp for opp, outcome in self.decisions if outcome == "win"]


def combination_search(
    opportunities: Sequence[Opportunity],
    selections: Selections,
    target: float,
    starting_revenue: float = 0.0,
    cap: int = DEFAULT_BACKLOG_CAP,
) -> list[Combination]:
    """
    Depth-first search (win before loss) for up to cap combinations reaching target.

    Results come in index order, not probability order: the first cap found
    are returned. Forced outcomes are honored; branches that cannot reach
    the target are skipped using the suffix-max bound.
    """
    if cap < 1:
        raise ValueError(f"cap must be >= 1, got {cap}")

    opps = list(opportunities)
    bounds = SuffixBounds.compute(opps, selections)
    results: list[Combination] = []
    path: list[tuple[Opportunity, Outcome]] = []

    def search(index: int, revenue: float, probability: float) -> None:
        if len(results) >= cap:
            return
        if revenue >= target:
            results.append(Combination(decisions=list(path), revenue=revenue, probability=probability))
            return
        if bounds.infeasible(index, revenue, target) or index >= len(opps):
            return

        opp = opps[index]
        for outcome in viable_outcomes(opp, selections):
            path.append((opp, outcome))
            search(
                index + 1,
                revenue + opp.value if outcome == "win" else revenue,
                probability * branch_factor(opp, outcome),
            )
            path.pop()
            if len(results) >= cap:
                return

    search(0, starting_revenue, 1.0)
    return results


def _ranked_combinations(
    backlog: Sequence[Opportunity],
    selections: Selections,
    target: float,
    starting_revenue: float,
    cap: int,
) -> list[Combination]:
    """Top cap backlog combinations by probability, via the best-first builder."""
    tree = build_path_tree(backlog, selections, target, starting_revenue, top_k=cap)
    combos: list[Combination] = []
    for terminal in tree.terminals:
        decisions = [(opp, terminal.resolved[opp.id]) for opp in backlog if opp.id in terminal.resolved]
        combos.append(
            Combination(decisions=decisions, revenue=terminal.revenue, probability=terminal.probability)
        )
    return combos


def _focus_id(priority: Sequence[Opportunity], selections: Selections) -> Optional[str]:
    """The next actionable opportunity: first undecided one in the prefix."""
    for opp in priority:
        if resolved_outcome(opp, selections) is None:
            return opp.id
    return None


def _dominant_outcomes(counter: PathCounter, index: int, revenue: float, opp: Opportunity) -> tuple[Outcome, ...]:
    """Keep one outcome when its reachable-success count is strictly larger."""
    win_success, _ = counter.count_from(index + 1, revenue + opp.value)
    loss_success, _ = counter.count_from(index + 1, revenue)
    if win_success > loss_success:
        return ("win",)
    if loss_success > win_success:
        return ("loss",)
    return OUTCOMES


def build_two_tier_tree(
    opportunities: Sequence[Opportunity],
    selections: Selections,
    target: float,
    starting_revenue: float = 0.0,
    *,
    priority_size: int = DEFAULT_PRIORITY_SIZE,
    backlog_cap: int = DEFAULT_BACKLOG_CAP,
    backlog_strategy: BacklogStrategy = "first-found",
) -> DecisionTree:
    """
    Branch the first priority_size opportunities node by node, then attach
    up to backlog_cap backlog combinations under every surviving leaf.

    Free prefix decisions collapse to the outcome with strictly more
    reachable successes, except the focus opportunity, which always shows
    both. Branches that cannot reach the target end in a failure terminal.
    """
    if priority_size < 0:
        raise ValueError(f"priority_size must be >= 0, got {priority_size}")
    if backlog_cap < 1:
        raise ValueError(f"backlog_cap must be >= 1, got {backlog_cap}")
    if backlog_strategy not in ("first-found", "best-first"):
        raise ValueError(f"Unknown backlog strategy: {backlog_strategy}")

    opps = list(opportunities)
    priority = opps[:priority_size]
    backlog = opps[priority_size:]
    counter = PathCounter(opps, selections, target)
    focus = _focus_id(priority, selections)

    root = TreeNode(id=ROOT_ID, depth=0, revenue=starting_revenue, probability=1.0)
    terminals: list[TreeNode] = []

    def attach_backlog(leaf: TreeNode) -> None:
        if backlog_strategy == "best-first":
            combos = _ranked_combinations(backlog, selections, target, leaf.revenue, backlog_cap)
        else:
            combos = combination_search(backlog, selections, target, leaf.revenue, backlog_cap)
        if not combos:
            leaf.is_terminal = True
            leaf.result = "failure"
            return
        for combo in combos:
            terminal = _graft(leaf, combo)
            terminal.is_terminal = True
            terminal.result = "success"
            terminals.append(terminal)

    def expand(node: TreeNode, index: int) -> None:
        if node.revenue >= target:
            node.is_terminal = True
            node.result = "success"
            terminals.append(node)
            return
        if counter.bounds.infeasible(index, node.revenue, target):
            node.is_terminal = True
            node.result = "failure"
            return
        if index >= len(priority):
            attach_backlog(node)
            return

        opp = priority[index]
        forced = resolved_outcome(opp, selections) is not None
        outcomes = viable_outcomes(opp, selections)
        if not forced and opp.id != focus:
            outcomes = _dominant_outcomes(counter, index, node.revenue, opp)

        for outcome in outcomes:
            child = TreeNode(
                id=node.child_id(opp, outcome),
                depth=index + 1,
                revenue=node.revenue + opp.value if outcome == "win" else node.revenue,
                probability=node.probability * branch_factor(opp, outcome),
                resolved={**node.resolved, opp.id: outcome},
                opportunity=opp,
                outcome=outcome,
                parent_id=node.id,
            )
            node.children.append(child)
            expand(child, index + 1)

    expand(root, 0)
    nodes = list(root.walk())
    logger.debug(
        "Two-tier tree: %d priority, %d backlog, focus=%s, %d nodes, %d successful paths",
        len(priority),
        len(backlog),
        focus,
        len(nodes),
        len(terminals),
    )
    return DecisionTree(root=root, nodes=nodes, terminals=terminals)


def _graft(leaf: TreeNode, combo: Combination) -> TreeNode:
    """Insert a combination's decisions below leaf, sharing existing prefixes."""
    current = leaf
    for opp, outcome in combo.decisions:
        child_id = current.child_id(opp, outcome)
        existing = next((c for c in current.children if c.id == child_id), None)
        if existing is None:
            existing = TreeNode(
                id=child_id,
                depth=current.depth + 1,
                revenue=current.revenue + opp.value if outcome == "win" else current.revenue,
                probability=current.probability * branch_factor(opp, outcome),
                resolved={**current.resolved, opp.id: outcome},
                opportunity=opp,
                outcome=outcome,
                parent_id=current.id,
            )
            current.children.append(existing)
        current = existing
    return current
