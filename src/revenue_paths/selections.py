"""Compact text encoding of scenario selections: "id:win,id2:loss"."""

from typing import Mapping

from revenue_paths.models.opportunity import Outcome


def parse_selections(encoded: str | None) -> dict[str, Outcome]:
    """Decode selections; malformed pairs and unknown outcomes are ignored."""
    selections: dict[str, Outcome] = {}
    if not encoded:
        return selections
    for pair in encoded.split(","):
        opp_id, sep, outcome = pair.strip().rpartition(":")
        if not sep or not opp_id:
            continue
        if outcome == "win":
            selections[opp_id] = "win"
        elif outcome == "loss":
            selections[opp_id] = "loss"
    return selections


def format_selections(selections: Mapping[str, Outcome]) -> str:
    """Encode selections in insertion order."""
    return ",".join(f"{opp_id}:{outcome}" for opp_id, outcome in selections.items())
