"""Specialization trees: point pool, tree unlocking and node purchase.

A character earns specialization points into a SpecializationProgression,
unlocks whole trees whose requirements it meets, and then buys nodes inside
those trees. Buying a node unlocks every node whose prerequisites are now all
purchased.

Like skill node purchase, unlocking and buying raise on caller error and
return a new progression; the input is never mutated.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from storyforge.core.constants import MIN_ATTRIBUTE_VALUE
from storyforge.core.exceptions import (
    InsufficientPointsError,
    NegativePointsError,
    NodeNotFoundError,
    PurchaseNotAllowedError,
    SpecializationNotAvailableError,
    SpecializationNotFoundError,
)
from storyforge.core.logging import get_logger
from storyforge.models.character import CharacterProfile
from storyforge.models.enums import Attribute, ProgressionPointType
from storyforge.models.skill_tree import (
    SpecializationProgression,
    SpecializationProgressionRecord,
    SpecializationRequirement,
    SpecializationTree,
    SpecializationTreeNode,
)


logger = get_logger(__name__)

_STARTING_ATTRIBUTES = (Attribute.STRENGTH, Attribute.INTELLIGENCE, Attribute.CHARISMA)


# =============================================================================
# Point Pool
# =============================================================================


def calculate_initial_specialization_points(character: CharacterProfile) -> int:
    """Starting specialization points for a character.

    One point per five levels, plus one per 30 combined base strength,
    intelligence and charisma. Never less than one.
    """
    level_points = character.level // 5
    attribute_bonus = sum(character.base_attribute(a) for a in _STARTING_ATTRIBUTES) // 30
    return max(1, level_points + attribute_bonus)


def initialize_specialization_progression(
    character: CharacterProfile,
) -> SpecializationProgression:
    """Create an empty progression seeded with the starting point allowance."""
    return SpecializationProgression(
        character_id=character.id,
        available_points=calculate_initial_specialization_points(character),
    )


def earn_specialization_points(
    progression: SpecializationProgression,
    points: int,
    reason: str = "",
    *,
    turn_id: str = "",
    now: datetime | None = None,
) -> SpecializationProgression:
    """Add points to the pool and record why.

    Args:
        progression: Current progression. Not mutated.
        points: Points earned.
        reason: Story context stored on the history record.
        turn_id: Story turn that granted the points.
        now: Record timestamp; defaults to the current UTC time.

    Returns:
        A new progression with the points added to both totals.

    Raises:
        NegativePointsError: If points is negative.
    """
    if points < 0:
        raise NegativePointsError(
            f"Cannot earn a negative number of specialization points: {points}",
            character_id=progression.character_id,
            details={"points": points},
        )

    record = _record("earn_points", {"points_earned": points}, reason, turn_id, now)
    return progression.model_copy(
        update={
            "available_points": progression.available_points + points,
            "total_points_earned": progression.total_points_earned + points,
            "progression_history": [*progression.progression_history, record],
        },
        deep=True,
    )


# =============================================================================
# Tree Unlocking
# =============================================================================


def _effective_attribute(character: CharacterProfile, name: str) -> int:
    try:
        attribute = Attribute(name)
    except ValueError:
        return 0
    delta = character.attribute_progression.delta(attribute)
    return max(MIN_ATTRIBUTE_VALUE, character.base_attribute(attribute) + delta)


def _requirement_failure(
    requirement: SpecializationRequirement, character: CharacterProfile
) -> str | None:
    if requirement.type not in ("level", "attribute"):
        return None

    try:
        needed = float(requirement.value)
    except (TypeError, ValueError):
        logger.warning(
            "Unreadable specialization requirement",
            requirement_type=requirement.type,
            value=requirement.value,
        )
        return f"Unreadable requirement: {requirement.description or requirement.type}"

    if requirement.type == "level":
        if character.level < needed:
            return f"Requires level {requirement.value}"
    elif _effective_attribute(character, requirement.target) < needed:
        return f"Requires {requirement.target} {requirement.value}"
    return None


def check_tree_requirements(tree: SpecializationTree, character: CharacterProfile) -> str | None:
    """Check a tree's unlock requirements against a character.

    ``level`` requirements compare the character level; ``attribute``
    requirements compare the effective attribute (base plus allocation).
    Unknown attributes count as zero. Other requirement types are ignored.

    Returns:
        The first failure reason, or None if every requirement is met.
    """
    for requirement in tree.unlock_requirements:
        failure = _requirement_failure(requirement, character)
        if failure is not None:
            return failure
    return None


def _exclusivity_failure(
    tree: SpecializationTree, progression: SpecializationProgression
) -> str | None:
    for tree_id, unlocked in progression.specialization_trees.items():
        if tree_id in tree.exclusive_with or tree.id in unlocked.exclusive_with:
            return f"Cannot unlock due to exclusive specialization: {tree_id}"
    return None


def unlock_connected_nodes(
    nodes: list[SpecializationTreeNode],
) -> list[SpecializationTreeNode]:
    """Mark nodes unlocked once all their prerequisites are purchased.

    Nodes already unlocked or purchased are returned as they are.

    Returns:
        A new list; input nodes are not mutated.
    """
    purchased = {n.id for n in nodes if n.is_purchased}
    return [
        node.model_copy(update={"is_unlocked": True})
        if not node.is_unlocked
        and not node.is_purchased
        and all(p in purchased for p in node.prerequisites)
        else node
        for node in nodes
    ]


def unlock_specialization_tree(
    progression: SpecializationProgression,
    tree: SpecializationTree,
    character: CharacterProfile,
) -> SpecializationProgression:
    """Unlock a specialization tree for a character.

    Args:
        progression: Current progression. Not mutated.
        tree: Catalog tree to unlock. Not mutated.
        character: Checked against the tree's requirements.

    Returns:
        A new progression holding a fresh copy of the tree with no points
        spent and its root nodes unlocked.

    Raises:
        SpecializationNotAvailableError: If the tree is already unlocked, a
            requirement is not met, or an exclusive tree is unlocked.
    """
    if tree.id in progression.specialization_trees:
        reason = "Specialization tree already unlocked"
    else:
        reason = check_tree_requirements(tree, character) or _exclusivity_failure(
            tree, progression
        )
    if reason is not None:
        raise SpecializationNotAvailableError(
            f"Cannot unlock specialization tree {tree.id}: {reason}",
            character_id=character.id,
            details={"tree_id": tree.id, "reason": reason},
        )

    unlocked = tree.model_copy(
        update={"points_spent": 0, "nodes": unlock_connected_nodes(tree.nodes)},
        deep=True,
    )

    logger.info(
        "Specialization tree unlocked",
        character_id=character.id,
        tree_id=tree.id,
    )
    return progression.model_copy(
        update={
            "specialization_trees": {**progression.specialization_trees, tree.id: unlocked},
        },
        deep=True,
    )


# =============================================================================
# Node Purchase
# =============================================================================


def purchase_specialization_node(
    progression: SpecializationProgression,
    tree_id: str,
    node_id: str,
    *,
    turn_id: str = "",
    now: datetime | None = None,
) -> SpecializationProgression:
    """Buy a node in an unlocked specialization tree.

    Args:
        progression: Current progression. Not mutated.
        tree_id: Id of an unlocked tree.
        node_id: Id of the node to buy.
        turn_id: Story turn of the purchase, stored on the history record.
        now: Record timestamp; defaults to the current UTC time.

    Returns:
        A new progression with the node purchased, its cost deducted and
        added to the tree's points spent, and newly reachable nodes unlocked.

    Raises:
        SpecializationNotFoundError: If the tree has not been unlocked.
        NodeNotFoundError: If the tree has no such node.
        PurchaseNotAllowedError: If the node is already purchased, still
            locked, or has unpurchased prerequisites.
        InsufficientPointsError: If the pool cannot cover the node's cost.
    """
    tree = progression.specialization_trees.get(tree_id)
    if tree is None:
        raise SpecializationNotFoundError(
            f"Specialization tree {tree_id} is not unlocked",
            character_id=progression.character_id,
            details={"tree_id": tree_id},
        )

    node = tree.get_node(node_id) if node_id else None
    if node is None:
        raise NodeNotFoundError(
            f"Specialization node {node_id} not found in tree {tree_id}",
            node_id=node_id,
            tree_id=tree_id,
        )

    purchased = {n.id for n in tree.nodes if n.is_purchased}
    if node.is_purchased:
        reason = "Node already purchased"
    elif not node.is_unlocked:
        reason = "Node not unlocked"
    elif not all(p in purchased for p in node.prerequisites):
        reason = "Prerequisites not met"
    else:
        reason = None
    if reason is not None:
        raise PurchaseNotAllowedError(
            f"Cannot purchase specialization node {node_id}: {reason}",
            character_id=progression.character_id,
            details={"tree_id": tree_id, "node_id": node_id, "reason": reason},
        )

    if progression.available_points < node.point_cost:
        raise InsufficientPointsError(
            f"Specialization node {node_id} costs {node.point_cost} points",
            pool=ProgressionPointType.SPECIALIZATION.value,
            available=progression.available_points,
            required=node.point_cost,
        )

    nodes = [
        n.model_copy(update={"is_purchased": True}) if n.id == node_id else n
        for n in tree.nodes
    ]
    updated_tree = tree.model_copy(
        update={
            "nodes": unlock_connected_nodes(nodes),
            "points_spent": tree.points_spent + node.point_cost,
        },
        deep=True,
    )
    record = _record(
        "purchase_node",
        {"specialization_id": tree_id, "node_id": node_id, "points_spent": node.point_cost},
        f"Purchased {node.name} in {tree.name}",
        turn_id,
        now,
    )

    logger.info(
        "Specialization node purchased",
        character_id=progression.character_id,
        tree_id=tree_id,
        node_id=node_id,
        cost=node.point_cost,
    )
    return progression.model_copy(
        update={
            "available_points": progression.available_points - node.point_cost,
            "specialization_trees": {**progression.specialization_trees, tree_id: updated_tree},
            "progression_history": [*progression.progression_history, record],
        },
        deep=True,
    )


def _record(
    action: str,
    details: dict[str, Any],
    story_context: str,
    turn_id: str,
    now: datetime | None,
) -> SpecializationProgressionRecord:
    return SpecializationProgressionRecord(
        timestamp=now if now is not None else datetime.now(UTC),
        turn_id=turn_id,
        action=action,
        details=details,
        story_context=story_context,
    )


__all__ = [
    "calculate_initial_specialization_points",
    "initialize_specialization_progression",
    "earn_specialization_points",
    "check_tree_requirements",
    "unlock_connected_nodes",
    "unlock_specialization_tree",
    "purchase_specialization_node",
]
