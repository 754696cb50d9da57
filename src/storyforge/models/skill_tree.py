"""Pydantic V2 schemas for skill trees and specializations.

Skill trees and specialization catalogs are read-only reference data
supplied by the host. Node fields are intentionally permissive so that
imperfect externally-authored data still loads; the progression engine
screens it and skips what it cannot use.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any
from uuid import uuid4

from pydantic import Field, StrictInt

from storyforge.models.base import StoryForgeModel
from storyforge.models.enums import SkillNodeEffectType, SpecializationBonusType


class SkillNodeEffect(StoryForgeModel):
    """A benefit granted by a skill tree node.

    Attributes:
        type: Kind of benefit.
        value: Numeric bonus or identifier of the unlocked feature.
        description: Display text.
        target: Stat or system the benefit applies to.
    """

    type: SkillNodeEffectType
    value: float | str
    description: str = ""
    target: str | None = None


class NodePosition(StoryForgeModel):
    """Grid position of a node in the tree layout."""

    x: float
    y: float


class SkillTreeNode(StoryForgeModel):
    """A purchasable node in a skill tree.

    Attributes:
        id: Unique node id within its tree. Empty means malformed.
        name: Display name.
        description: Display text.
        icon: Icon identifier for the host UI.
        tier: Minimum character level, and depth in the prerequisite graph.
        cost: Skill points required to purchase.
        prerequisites: Node ids that must already be purchased.
        effects: Benefits granted once purchased.
        position: Optional layout position.
        category: Optional grouping label.
    """

    id: str = ""
    name: str = ""
    description: str = ""
    icon: str | None = None
    tier: int = 1
    cost: int = 1
    prerequisites: list[str] = Field(default_factory=list)
    effects: list[SkillNodeEffect] = Field(default_factory=list)
    position: NodePosition | None = None
    category: str | None = None


class SkillTreeConnection(StoryForgeModel):
    """A drawn edge between two nodes."""

    from_node_id: str
    to_node_id: str
    type: str = "prerequisite"


class SkillTreeLayout(StoryForgeModel):
    """Grid bounds used to validate node positions, plus drawn edges."""

    width: Annotated[int, Field(ge=1)]
    height: Annotated[int, Field(ge=1)]
    connections: list[SkillTreeConnection] = Field(default_factory=list)


class SkillTree(StoryForgeModel):
    """A directed acyclic graph of skill nodes.

    Attributes:
        id: Unique tree id.
        name: Display name.
        description: Display text.
        category: Grouping label (combat, magic, ...).
        required_level: Level at which the tree becomes visible.
        nodes: Nodes in the tree.
        layout: Optional grid bounds and drawn edges.
    """

    id: str
    name: str = ""
    description: str = ""
    category: str = "combat"
    required_level: int = 1
    nodes: list[SkillTreeNode] = Field(default_factory=list)
    layout: SkillTreeLayout | None = None

    def get_node(self, node_id: str) -> SkillTreeNode | None:
        """Find a node by id."""
        return next((n for n in self.nodes if n.id == node_id), None)


class SpecializationBonus(StoryForgeModel):
    """A bonus granted by a specialization at a given progression level."""

    type: SpecializationBonusType
    value: float | str
    description: str = ""
    applies_at_level: int = 1


class Specialization(StoryForgeModel):
    """A specialization entry from a catalog, or an active instance.

    Attributes:
        id: Unique specialization id. Empty means malformed.
        name: Display name.
        description: Display text.
        category: Grouping label.
        unlocked_at_level: Minimum character level.
        bonuses: Bonuses granted as the specialization progresses.
        exclusive_with: Ids that cannot be active alongside this one.
        is_active: True for instances on a character.
        progression_level: Progression of an active instance (0 in catalogs).
    """

    id: str = ""
    name: str = ""
    description: str = ""
    category: str = ""
    unlocked_at_level: StrictInt
    bonuses: list[SpecializationBonus] = Field(default_factory=list)
    exclusive_with: list[str] = Field(default_factory=list)
    is_active: bool = False
    progression_level: Annotated[int, Field(ge=0)] = 0


# =============================================================================
# Specialization Trees
# =============================================================================


class SpecializationRequirement(StoryForgeModel):
    """A condition a character must meet to unlock a specialization tree.

    ``level`` requirements compare against the character level and
    ``attribute`` requirements against the named attribute. Other types are
    carried as data and not checked.
    """

    type: str
    target: str = ""
    value: float | str = 0
    description: str = ""


class SpecializationTreeNode(StoryForgeModel):
    """A node bought with specialization points inside an unlocked tree.

    Attributes:
        id: Unique node id within its tree.
        name: Display name.
        description: Display text.
        tier: Depth in the tree.
        position: Optional layout position.
        point_cost: Specialization points required to purchase.
        prerequisites: Node ids that must already be purchased.
        bonuses: Bonuses granted once purchased.
        is_unlocked: True once every prerequisite is purchased.
        is_purchased: True once bought.
        icon: Icon identifier for the host UI.
        color: Display color for the host UI.
    """

    id: str = ""
    name: str = ""
    description: str = ""
    tier: int = 1
    position: NodePosition | None = None
    point_cost: Annotated[int, Field(ge=0)] = 1
    prerequisites: list[str] = Field(default_factory=list)
    bonuses: list[SpecializationBonus] = Field(default_factory=list)
    is_unlocked: bool = False
    is_purchased: bool = False
    icon: str | None = None
    color: str | None = None


class SpecializationTier(StoryForgeModel):
    """Display grouping of a tree's nodes by tier."""

    tier: int
    name: str = ""
    description: str = ""
    required_points: int = 0


class SpecializationTree(StoryForgeModel):
    """A specialization tree, as catalog data or unlocked on a character.

    Attributes:
        id: Unique tree id.
        name: Display name.
        description: Display text.
        category: Grouping label (combat, magic, social, ...).
        nodes: Purchasable nodes.
        connections: Drawn edges between nodes.
        tiers: Display tiers.
        unlock_requirements: Conditions checked when the tree is unlocked.
        exclusive_with: Tree ids that cannot be unlocked alongside this one.
        max_points: Points needed to complete the tree.
        points_spent: Points spent in this tree so far.
        completion_bonuses: Bonuses granted once the tree is complete.
    """

    id: str
    name: str = ""
    description: str = ""
    category: str = ""
    nodes: list[SpecializationTreeNode] = Field(default_factory=list)
    connections: list[SkillTreeConnection] = Field(default_factory=list)
    tiers: list[SpecializationTier] = Field(default_factory=list)
    unlock_requirements: list[SpecializationRequirement] = Field(default_factory=list)
    exclusive_with: list[str] = Field(default_factory=list)
    max_points: Annotated[int, Field(ge=0)] = 0
    points_spent: Annotated[int, Field(ge=0)] = 0
    completion_bonuses: list[SpecializationBonus] = Field(default_factory=list)

    def get_node(self, node_id: str) -> SpecializationTreeNode | None:
        """Find a node by id."""
        return next((n for n in self.nodes if n.id == node_id), None)


class SpecializationProgressionRecord(StoryForgeModel):
    """One entry in a character's specialization history."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime
    turn_id: str = ""
    action: str
    details: dict[str, Any] = Field(default_factory=dict)
    story_context: str = ""


class SpecializationProgression(StoryForgeModel):
    """A character's specialization point pool and unlocked trees.

    Attributes:
        character_id: Owner of this progression.
        available_points: Unspent specialization points.
        total_points_earned: Lifetime points earned after initialization.
        specialization_trees: Unlocked trees by id, with purchase state.
        progression_history: Append-only log of earn and purchase events.
    """

    character_id: str
    available_points: Annotated[int, Field(ge=0)] = 0
    total_points_earned: Annotated[int, Field(ge=0)] = 0
    specialization_trees: dict[str, SpecializationTree] = Field(default_factory=dict)
    progression_history: list[SpecializationProgressionRecord] = Field(default_factory=list)


__all__ = [
    "SkillNodeEffect",
    "NodePosition",
    "SkillTreeNode",
    "SkillTreeConnection",
    "SkillTreeLayout",
    "SkillTree",
    "SpecializationBonus",
    "Specialization",
    "SpecializationRequirement",
    "SpecializationTreeNode",
    "SpecializationTier",
    "SpecializationTree",
    "SpecializationProgressionRecord",
    "SpecializationProgression",
]
