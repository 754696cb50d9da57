"""Skill tree unlocking, purchase and validation.

Skill trees are externally authored, so structurally invalid nodes are
screened out with a logged warning rather than an exception. Purchasing is
the one operation that raises, since asking to buy an unknown or locked node
is a caller error.
"""

from __future__ import annotations

from collections.abc import Collection

from storyforge.core.exceptions import NodeNotFoundError, PurchaseNotAllowedError
from storyforge.core.logging import get_logger
from storyforge.models.base import Skipped
from storyforge.models.character import CharacterProfile
from storyforge.models.skill_tree import SkillTree, SkillTreeNode


logger = get_logger(__name__)


def inspect_node(node: SkillTreeNode) -> Skipped | None:
    """Check a node for structural problems.

    Args:
        node: The node to inspect.

    Returns:
        A Skipped record naming the problem, or None if the node is usable.
    """
    if not node.id:
        return Skipped(item_id=None, reason="node is missing an id")
    if node.tier < 1:
        return Skipped(item_id=node.id, reason=f"tier {node.tier} is below 1")
    invalid = [p for p in node.prerequisites if not p]
    if invalid:
        return Skipped(item_id=node.id, reason="node has an empty prerequisite id")
    return None


def is_unlocked(
    node: SkillTreeNode,
    purchased_ids: Collection[str],
    character: CharacterProfile,
) -> bool:
    """Whether a node is visible and purchasable, points aside.

    A node is unlocked when the character's level reaches its tier and every
    prerequisite has been purchased. Malformed nodes are never unlocked.
    """
    skipped = inspect_node(node)
    if skipped is not None:
        logger.warning("Invalid skill node", node_id=skipped.item_id, reason=skipped.reason)
        return False

    if node.tier > character.level:
        return False

    return all(prereq in purchased_ids for prereq in node.prerequisites)


def can_purchase(
    node: SkillTreeNode,
    purchased_ids: Collection[str],
    available_points: int,
    character: CharacterProfile,
) -> bool:
    """Whether a node can be bought right now.

    Returns:
        False if already purchased, not unlocked, or too expensive.
    """
    if node.id in purchased_ids:
        return False
    if not is_unlocked(node, purchased_ids, character):
        return False
    return available_points >= node.cost


def purchase(node_id: str, character: CharacterProfile, tree: SkillTree) -> CharacterProfile:
    """Buy a skill node with skill points.

    Args:
        node_id: Id of the node to buy.
        character: The buyer. Not mutated.
        tree: The tree containing the node.

    Returns:
        A new character with the node recorded and its cost deducted.

    Raises:
        NodeNotFoundError: If the tree has no such node.
        PurchaseNotAllowedError: If the node cannot be purchased.
    """
    node = tree.get_node(node_id) if node_id else None
    if node is None:
        raise NodeNotFoundError(
            f"Skill node {node_id} not found in skill tree {tree.id}",
            node_id=node_id,
            tree_id=tree.id,
        )

    points = character.progression_points
    if not can_purchase(node, character.purchased_skill_nodes, points.skill, character):
        raise PurchaseNotAllowedError(
            f"Cannot purchase skill node {node_id}",
            character_id=character.id,
            details={"node_id": node_id, "cost": node.cost, "skill_points": points.skill},
        )

    logger.info(
        "Skill node purchased",
        character_id=character.id,
        tree_id=tree.id,
        node_id=node_id,
        cost=node.cost,
    )
    return character.model_copy(
        update={
            "purchased_skill_nodes": [*character.purchased_skill_nodes, node_id],
            "progression_points": points.model_copy(update={"skill": points.skill - node.cost}),
        },
        deep=True,
    )


def get_unlocked_nodes(tree: SkillTree, character: CharacterProfile) -> list[SkillTreeNode]:
    """Nodes of a tree the character has unlocked but not yet bought."""
    purchased = character.purchased_skill_nodes
    return [
        node
        for node in tree.nodes
        if node.id not in purchased and is_unlocked(node, purchased, character)
    ]


def validate_skill_tree(tree: SkillTree) -> list[str]:
    """Collect structural problems in a skill tree.

    Checks for missing and duplicate node ids, positions outside the layout,
    dangling prerequisites and negative costs.

    Returns:
        Human-readable error strings; empty if the tree is sound.
    """
    errors: list[str] = []
    if not tree.id:
        errors.append("Skill tree missing ID")

    known_ids = {node.id for node in tree.nodes if node.id}
    seen: set[str] = set()

    for index, node in enumerate(tree.nodes):
        if not node.id:
            errors.append(f"Node at index {index} missing ID")
        elif node.id in seen:
            errors.append(f"Duplicate node ID: {node.id}")
        else:
            seen.add(node.id)

        if tree.layout is not None and node.position is not None:
            if not 1 <= node.position.x <= tree.layout.width:
                errors.append(
                    f"Node {node.id} position.x ({node.position.x}) outside layout "
                    f"width ({tree.layout.width})"
                )
            if not 1 <= node.position.y <= tree.layout.height:
                errors.append(
                    f"Node {node.id} position.y ({node.position.y}) outside layout "
                    f"height ({tree.layout.height})"
                )

        for prereq in node.prerequisites:
            if prereq not in known_ids:
                errors.append(f"Node {node.id} has invalid prerequisite: {prereq}")

        if node.cost < 0:
            errors.append(f"Node {node.id} has negative cost: {node.cost}")

    if errors:
        logger.warning("Skill tree failed validation", tree_id=tree.id, error_count=len(errors))
    return errors


__all__ = [
    "inspect_node",
    "is_unlocked",
    "can_purchase",
    "purchase",
    "get_unlocked_nodes",
    "validate_skill_tree",
]
