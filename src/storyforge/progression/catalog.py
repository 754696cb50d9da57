"""Default skill trees and specializations.

Hosts normally supply their own reference data; these defaults cover the
combat, magic and crafting trees, the starter specializations and three
specialization trees.
"""

from __future__ import annotations

from storyforge.core.logging import get_logger
from storyforge.models.enums import SkillNodeEffectType as Fx
from storyforge.models.enums import SpecializationBonusType as Bonus
from storyforge.models.skill_tree import (
    NodePosition,
    SkillNodeEffect,
    SkillTree,
    SkillTreeConnection,
    SkillTreeLayout,
    SkillTreeNode,
    Specialization,
    SpecializationBonus,
    SpecializationRequirement,
    SpecializationTier,
    SpecializationTree,
    SpecializationTreeNode,
)


logger = get_logger(__name__)


def _node(
    node_id: str,
    name: str,
    description: str,
    *,
    icon: str,
    tier: int,
    cost: int,
    prerequisites: tuple[str, ...] = (),
    effects: tuple[SkillNodeEffect, ...],
    position: tuple[float, float],
    category: str,
) -> SkillTreeNode:
    return SkillTreeNode(
        id=node_id,
        name=name,
        description=description,
        icon=icon,
        tier=tier,
        cost=cost,
        prerequisites=list(prerequisites),
        effects=list(effects),
        position=NodePosition(x=position[0], y=position[1]),
        category=category,
    )


def _edges(*pairs: tuple[str, str]) -> list[SkillTreeConnection]:
    return [SkillTreeConnection(from_node_id=a, to_node_id=b) for a, b in pairs]


# =============================================================================
# Skill Trees
# =============================================================================

COMBAT_SKILL_TREE = SkillTree(
    id="combat",
    name="Combat Mastery",
    description="Master the arts of warfare, weapon techniques, and tactical combat.",
    category="combat",
    required_level=1,
    nodes=[
        _node(
            "basic_attack",
            "Basic Attack Training",
            "Improves accuracy and damage with basic attacks.",
            icon="sword",
            tier=1,
            cost=1,
            effects=(
                SkillNodeEffect(
                    type=Fx.STAT_BONUS, value=2, description="+2 Attack", target="attack"
                ),
                SkillNodeEffect(
                    type=Fx.STAT_BONUS, value=5, description="+5% Accuracy", target="accuracy"
                ),
            ),
            position=(2, 1),
            category="combat",
        ),
        _node(
            "weapon_proficiency",
            "Weapon Proficiency",
            "Reduces penalties when using unfamiliar weapons.",
            icon="crossed-swords",
            tier=1,
            cost=1,
            effects=(
                SkillNodeEffect(
                    type=Fx.PASSIVE_EFFECT,
                    value="weapon_penalty_reduction",
                    description="Reduces weapon unfamiliarity penalties by 50%",
                ),
            ),
            position=(1, 1),
            category="combat",
        ),
        _node(
            "defensive_stance",
            "Defensive Stance",
            "Learn to adopt a defensive posture in combat.",
            icon="shield",
            tier=1,
            cost=1,
            effects=(
                SkillNodeEffect(
                    type=Fx.STAT_BONUS, value=3, description="+3 Defense", target="defense"
                ),
                SkillNodeEffect(
                    type=Fx.COMBAT_SKILL,
                    value="defensive_stance",
                    description="Unlocks Defensive Stance combat action",
                ),
            ),
            position=(3, 1),
            category="combat",
        ),
        _node(
            "power_attack",
            "Power Attack",
            "Sacrifice accuracy for devastating damage.",
            icon="hammer",
            tier=2,
            cost=2,
            prerequisites=("basic_attack",),
            effects=(
                SkillNodeEffect(
                    type=Fx.COMBAT_SKILL,
                    value="power_attack",
                    description="Unlocks Power Attack: -10% accuracy, +50% damage",
                ),
            ),
            position=(2, 2),
            category="combat",
        ),
        _node(
            "dual_wielding",
            "Dual Wielding",
            "Learn to fight with two weapons simultaneously.",
            icon="dual-swords",
            tier=2,
            cost=3,
            prerequisites=("weapon_proficiency",),
            effects=(
                SkillNodeEffect(
                    type=Fx.PASSIVE_EFFECT,
                    value="dual_wield_enabled",
                    description="Can equip weapons in both hands",
                ),
                SkillNodeEffect(
                    type=Fx.STAT_BONUS,
                    value=1,
                    description="+1 Attack per equipped weapon",
                    target="attack",
                ),
            ),
            position=(1, 2),
            category="combat",
        ),
        _node(
            "shield_mastery",
            "Shield Mastery",
            "Become proficient with shields and blocking techniques.",
            icon="shield-check",
            tier=2,
            cost=2,
            prerequisites=("defensive_stance",),
            effects=(
                SkillNodeEffect(
                    type=Fx.STAT_BONUS,
                    value=5,
                    description="+5 Defense when using shield",
                    target="defense",
                ),
                SkillNodeEffect(
                    type=Fx.COMBAT_SKILL,
                    value="shield_bash",
                    description="Unlocks Shield Bash attack",
                ),
            ),
            position=(3, 2),
            category="combat",
        ),
        _node(
            "berserker_rage",
            "Berserker Rage",
            "Enter a rage state for increased damage but reduced defense.",
            icon="angry",
            tier=3,
            cost=3,
            prerequisites=("power_attack",),
            effects=(
                SkillNodeEffect(
                    type=Fx.COMBAT_SKILL,
                    value="berserker_rage",
                    description="Unlocks Berserker Rage: +100% damage, -50% defense for 3 turns",
                ),
            ),
            position=(2, 3),
            category="combat",
        ),
        _node(
            "whirlwind_attack",
            "Whirlwind Attack",
            "Attack all nearby enemies in a spinning motion.",
            icon="tornado",
            tier=3,
            cost=4,
            prerequisites=("dual_wielding", "power_attack"),
            effects=(
                SkillNodeEffect(
                    type=Fx.COMBAT_SKILL,
                    value="whirlwind",
                    description="Unlocks Whirlwind: Attack all adjacent enemies",
                ),
            ),
            position=(1.5, 3),
            category="combat",
        ),
        _node(
            "fortress_defense",
            "Fortress Defense",
            "Become an immovable defensive wall.",
            icon="castle",
            tier=3,
            cost=3,
            prerequisites=("shield_mastery",),
            effects=(
                SkillNodeEffect(
                    type=Fx.COMBAT_SKILL,
                    value="fortress_stance",
                    description="Unlocks Fortress Stance: Immobile but +200% defense",
                ),
                SkillNodeEffect(
                    type=Fx.PASSIVE_EFFECT,
                    value="damage_reduction",
                    description="10% damage reduction from all sources",
                ),
            ),
            position=(3, 3),
            category="combat",
        ),
    ],
    layout=SkillTreeLayout(
        width=4,
        height=3,
        connections=_edges(
            ("basic_attack", "power_attack"),
            ("weapon_proficiency", "dual_wielding"),
            ("defensive_stance", "shield_mastery"),
            ("power_attack", "berserker_rage"),
            ("dual_wielding", "whirlwind_attack"),
            ("power_attack", "whirlwind_attack"),
            ("shield_mastery", "fortress_defense"),
        ),
    ),
)

MAGIC_SKILL_TREE = SkillTree(
    id="magic",
    name="Arcane Arts",
    description="Harness the power of magic through study and practice.",
    category="magic",
    required_level=1,
    nodes=[
        _node(
            "mana_efficiency",
            "Mana Efficiency",
            "Reduce the mana cost of all spells.",
            icon="droplet",
            tier=1,
            cost=1,
            effects=(
                SkillNodeEffect(
                    type=Fx.PASSIVE_EFFECT,
                    value="mana_cost_reduction_10",
                    description="10% reduction in mana costs",
                ),
                SkillNodeEffect(
                    type=Fx.STAT_BONUS, value=10, description="+10 Max Mana", target="maxMana"
                ),
            ),
            position=(2, 1),
            category="magic",
        ),
        _node(
            "elemental_affinity",
            "Elemental Affinity",
            "Increase damage with elemental spells.",
            icon="flame",
            tier=1,
            cost=1,
            effects=(
                SkillNodeEffect(
                    type=Fx.PASSIVE_EFFECT,
                    value="elemental_damage_bonus_15",
                    description="+15% elemental spell damage",
                ),
            ),
            position=(1, 1),
            category="magic",
        ),
        _node(
            "spell_focus",
            "Spell Focus",
            "Improve spell accuracy and reduce casting time.",
            icon="target",
            tier=1,
            cost=1,
            effects=(
                SkillNodeEffect(
                    type=Fx.STAT_BONUS,
                    value=10,
                    description="+10% Spell Accuracy",
                    target="accuracy",
                ),
                SkillNodeEffect(
                    type=Fx.PASSIVE_EFFECT,
                    value="cast_time_reduction",
                    description="25% faster spell casting",
                ),
            ),
            position=(3, 1),
            category="magic",
        ),
        _node(
            "metamagic",
            "Metamagic",
            "Modify spells with additional effects.",
            icon="wand",
            tier=2,
            cost=2,
            prerequisites=("mana_efficiency",),
            effects=(
                SkillNodeEffect(
                    type=Fx.PASSIVE_EFFECT,
                    value="metamagic_enabled",
                    description="Can apply metamagic effects to spells",
                ),
            ),
            position=(2, 2),
            category="magic",
        ),
        _node(
            "elemental_mastery",
            "Elemental Mastery",
            "Master control over elemental forces.",
            icon="elements",
            tier=2,
            cost=3,
            prerequisites=("elemental_affinity",),
            effects=(
                SkillNodeEffect(
                    type=Fx.COMBAT_SKILL,
                    value="elemental_burst",
                    description="Unlocks Elemental Burst area attack",
                ),
                SkillNodeEffect(
                    type=Fx.PASSIVE_EFFECT,
                    value="elemental_resistance_25",
                    description="25% resistance to elemental damage",
                ),
            ),
            position=(1, 2),
            category="magic",
        ),
        _node(
            "spell_penetration",
            "Spell Penetration",
            "Spells bypass magical defenses more effectively.",
            icon="arrow-through",
            tier=2,
            cost=2,
            prerequisites=("spell_focus",),
            effects=(
                SkillNodeEffect(
                    type=Fx.PASSIVE_EFFECT,
                    value="magic_resistance_ignore_50",
                    description="Ignore 50% of target's magic resistance",
                ),
            ),
            position=(3, 2),
            category="magic",
        ),
    ],
    layout=SkillTreeLayout(
        width=4,
        height=2,
        connections=_edges(
            ("mana_efficiency", "metamagic"),
            ("elemental_affinity", "elemental_mastery"),
            ("spell_focus", "spell_penetration"),
        ),
    ),
)

CRAFTING_SKILL_TREE = SkillTree(
    id="crafting",
    name="Crafting Mastery",
    description="Master the arts of creation, enhancement, and item maintenance.",
    category="crafting",
    required_level=1,
    nodes=[
        _node(
            "smithing_basics",
            "Basic Smithing",
            "Learn the fundamentals of metalworking and weapon crafting.",
            icon="hammer",
            tier=1,
            cost=1,
            effects=(
                SkillNodeEffect(
                    type=Fx.STAT_BONUS,
                    value=10,
                    description="+10% Smithing Success Rate",
                    target="smithing_success",
                ),
                SkillNodeEffect(
                    type=Fx.ABILITY_UNLOCK,
                    value="basic_smithing",
                    description="Unlock basic smithing recipes",
                    target="recipes",
                ),
            ),
            position=(1, 1),
            category="crafting",
        ),
        _node(
            "alchemy_basics",
            "Basic Alchemy",
            "Learn to brew potions and create magical compounds.",
            icon="flask",
            tier=1,
            cost=1,
            effects=(
                SkillNodeEffect(
                    type=Fx.STAT_BONUS,
                    value=10,
                    description="+10% Alchemy Success Rate",
                    target="alchemy_success",
                ),
                SkillNodeEffect(
                    type=Fx.ABILITY_UNLOCK,
                    value="basic_alchemy",
                    description="Unlock basic alchemy recipes",
                    target="recipes",
                ),
            ),
            position=(3, 1),
            category="crafting",
        ),
        _node(
            "enchanting_basics",
            "Basic Enchanting",
            "Learn to imbue items with magical properties.",
            icon="sparkles",
            tier=1,
            cost=1,
            effects=(
                SkillNodeEffect(
                    type=Fx.STAT_BONUS,
                    value=10,
                    description="+10% Enchanting Success Rate",
                    target="enchanting_success",
                ),
                SkillNodeEffect(
                    type=Fx.ABILITY_UNLOCK,
                    value="basic_enchanting",
                    description="Unlock basic enchanting recipes",
                    target="recipes",
                ),
            ),
            position=(5, 1),
            category="crafting",
        ),
        _node(
            "advanced_smithing",
            "Advanced Smithing",
            "Master advanced metalworking techniques.",
            icon="anvil",
            tier=2,
            cost=2,
            prerequisites=("smithing_basics",),
            effects=(
                SkillNodeEffect(
                    type=Fx.STAT_BONUS,
                    value=15,
                    description="+15% Smithing Success Rate",
                    target="smithing_success",
                ),
                SkillNodeEffect(
                    type=Fx.STAT_BONUS,
                    value=10,
                    description="+10% Quality Chance",
                    target="smithing_quality",
                ),
                SkillNodeEffect(
                    type=Fx.ABILITY_UNLOCK,
                    value="advanced_smithing",
                    description="Unlock advanced smithing recipes",
                    target="recipes",
                ),
            ),
            position=(1, 2),
            category="crafting",
        ),
        _node(
            "repair_basics",
            "Item Repair",
            "Learn to repair and maintain equipment.",
            icon="wrench",
            tier=2,
            cost=1,
            prerequisites=("smithing_basics",),
            effects=(
                SkillNodeEffect(
                    type=Fx.STAT_BONUS,
                    value=20,
                    description="+20% Repair Success Rate",
                    target="repair_success",
                ),
                SkillNodeEffect(
                    type=Fx.STAT_BONUS,
                    value=15,
                    description="-15% Repair Material Cost",
                    target="repair_efficiency",
                ),
            ),
            position=(2, 2),
            category="crafting",
        ),
        _node(
            "enhancement_basics",
            "Item Enhancement",
            "Learn to enhance equipment with magical stones.",
            icon="gem",
            tier=2,
            cost=2,
            prerequisites=("enchanting_basics",),
            effects=(
                SkillNodeEffect(
                    type=Fx.STAT_BONUS,
                    value=15,
                    description="+15% Enhancement Success Rate",
                    target="enhancement_success",
                ),
                SkillNodeEffect(
                    type=Fx.STAT_BONUS,
                    value=10,
                    description="-10% Enhancement Failure Risk",
                    target="enhancement_safety",
                ),
            ),
            position=(4, 2),
            category="crafting",
        ),
    ],
    layout=SkillTreeLayout(
        width=6,
        height=3,
        connections=_edges(
            ("smithing_basics", "advanced_smithing"),
            ("smithing_basics", "repair_basics"),
            ("enchanting_basics", "enhancement_basics"),
        ),
    ),
)

DEFAULT_SKILL_TREES: tuple[SkillTree, ...] = (
    COMBAT_SKILL_TREE,
    MAGIC_SKILL_TREE,
    CRAFTING_SKILL_TREE,
)


# =============================================================================
# Specializations
# =============================================================================

DEFAULT_SPECIALIZATIONS: tuple[Specialization, ...] = (
    Specialization(
        id="warrior_berserker",
        name="Berserker",
        description="A fierce warrior who channels rage into devastating attacks.",
        category="combat",
        unlocked_at_level=5,
        bonuses=[
            SpecializationBonus(
                type=Bonus.STAT_MULTIPLIER,
                value=1.2,
                description="+20% Attack when below 50% health",
                applies_at_level=1,
            ),
            SpecializationBonus(
                type=Bonus.SKILL_COST_REDUCTION,
                value=1,
                description="Combat skills cost 1 less point",
                applies_at_level=3,
            ),
        ],
        exclusive_with=["warrior_guardian"],
    ),
    Specialization(
        id="warrior_guardian",
        name="Guardian",
        description="A defensive specialist who protects allies and controls the battlefield.",
        category="combat",
        unlocked_at_level=5,
        bonuses=[
            SpecializationBonus(
                type=Bonus.STAT_MULTIPLIER,
                value=1.3,
                description="+30% Defense when protecting allies",
                applies_at_level=1,
            ),
            SpecializationBonus(
                type=Bonus.UNIQUE_ABILITY,
                value="taunt",
                description="Can force enemies to attack you",
                applies_at_level=2,
            ),
        ],
        exclusive_with=["warrior_berserker"],
    ),
    Specialization(
        id="mage_elementalist",
        name="Elementalist",
        description="A mage who specializes in elemental magic and area effects.",
        category="magic",
        unlocked_at_level=5,
        bonuses=[
            SpecializationBonus(
                type=Bonus.STAT_MULTIPLIER,
                value=1.5,
                description="+50% elemental spell damage",
                applies_at_level=1,
            ),
            SpecializationBonus(
                type=Bonus.RESOURCE_BONUS,
                value=20,
                description="+20 Max Mana",
                applies_at_level=2,
            ),
        ],
        exclusive_with=["mage_enchanter"],
    ),
)


def get_skill_tree_by_id(tree_id: str) -> SkillTree | None:
    """Look up a default skill tree; returns None for unknown or empty ids."""
    if not tree_id or not isinstance(tree_id, str):
        logger.warning("Invalid skill tree ID", tree_id=tree_id)
        return None
    tree = next((t for t in DEFAULT_SKILL_TREES if t.id == tree_id), None)
    return tree.model_copy(deep=True) if tree is not None else None


def get_specialization_by_id(specialization_id: str) -> Specialization | None:
    """Look up a default specialization; returns None for unknown or empty ids."""
    if not specialization_id or not isinstance(specialization_id, str):
        logger.warning("Invalid specialization ID", specialization_id=specialization_id)
        return None
    spec = next((s for s in DEFAULT_SPECIALIZATIONS if s.id == specialization_id), None)
    return spec.model_copy(deep=True) if spec is not None else None


# =============================================================================
# Specialization Trees
# =============================================================================


def _tree_node(
    node_id: str,
    name: str,
    description: str,
    *,
    tier: int,
    cost: int,
    bonuses: tuple[SpecializationBonus, ...],
    icon: str,
    color: str,
    position: tuple[float, float],
    prerequisites: tuple[str, ...] = (),
) -> SpecializationTreeNode:
    return SpecializationTreeNode(
        id=node_id,
        name=name,
        description=description,
        tier=tier,
        position=NodePosition(x=position[0], y=position[1]),
        point_cost=cost,
        prerequisites=list(prerequisites),
        bonuses=list(bonuses),
        is_unlocked=not prerequisites,
        icon=icon,
        color=color,
    )


BERSERKER_PATH = SpecializationTree(
    id="berserker_path",
    name="Berserker's Fury",
    description=(
        "Channel rage and pain into devastating attacks. "
        "The lower your health, the stronger you become."
    ),
    category="combat",
    nodes=[
        _tree_node(
            "rage_initiation",
            "Rage Initiation",
            "Your anger fuels your strikes.",
            tier=1,
            cost=1,
            bonuses=(
                SpecializationBonus(
                    type=Bonus.STAT_MULTIPLIER,
                    value=1.1,
                    description="+10% attack when below 75% health",
                ),
            ),
            icon="sword",
            color="#ff4444",
            position=(2, 1),
        ),
        _tree_node(
            "berserker_resilience",
            "Berserker's Resilience",
            "Pain only makes you stronger.",
            tier=2,
            cost=2,
            prerequisites=("rage_initiation",),
            bonuses=(
                SpecializationBonus(
                    type=Bonus.STAT_MULTIPLIER,
                    value=1.2,
                    description="+20% attack when below 50% health",
                ),
                SpecializationBonus(
                    type=Bonus.RESOURCE_BONUS,
                    value=5,
                    description="+5 health regeneration per turn when in combat",
                ),
            ),
            icon="heart",
            color="#ff6666",
            position=(2, 2),
        ),
        _tree_node(
            "unstoppable_fury",
            "Unstoppable Fury",
            "At death's door, you become a force of nature.",
            tier=3,
            cost=3,
            prerequisites=("berserker_resilience",),
            bonuses=(
                SpecializationBonus(
                    type=Bonus.STAT_MULTIPLIER,
                    value=1.5,
                    description="+50% attack when below 25% health",
                ),
                SpecializationBonus(
                    type=Bonus.UNIQUE_ABILITY,
                    value="berserker_last_stand",
                    description=(
                        'Gain "Last Stand" ability - become immune to death for 3 turns '
                        "when health reaches 1"
                    ),
                ),
            ),
            icon="skull",
            color="#ff0000",
            position=(2, 3),
        ),
    ],
    connections=[
        SkillTreeConnection(from_node_id="rage_initiation", to_node_id="berserker_resilience"),
        SkillTreeConnection(from_node_id="berserker_resilience", to_node_id="unstoppable_fury"),
    ],
    tiers=[
        SpecializationTier(tier=1, name="Initiate", required_points=0),
        SpecializationTier(tier=2, name="Warrior", required_points=1),
        SpecializationTier(tier=3, name="Berserker", required_points=3),
    ],
    unlock_requirements=[
        SpecializationRequirement(
            type="level", target="character_level", value=3,
            description="Requires character level 3",
        ),
        SpecializationRequirement(
            type="attribute", target="strength", value=12, description="Requires 12 Strength",
        ),
    ],
    max_points=6,
    completion_bonuses=[
        SpecializationBonus(
            type=Bonus.STAT_MULTIPLIER, value=1.1, description="+10% maximum health"
        ),
    ],
)

ELEMENTAL_MASTERY = SpecializationTree(
    id="elemental_mastery",
    name="Elemental Mastery",
    description="Master the fundamental forces of fire, ice, and lightning.",
    category="magic",
    nodes=[
        _tree_node(
            "elemental_affinity",
            "Elemental Affinity",
            "The elements answer your call more readily.",
            tier=1,
            cost=1,
            bonuses=(
                SpecializationBonus(
                    type=Bonus.RESOURCE_BONUS, value=10, description="+10 maximum mana"
                ),
                SpecializationBonus(
                    type=Bonus.SKILL_COST_REDUCTION,
                    value=1,
                    description="Elemental spells cost 1 less mana",
                ),
            ),
            icon="flame",
            color="#4488ff",
            position=(2, 1),
        ),
        _tree_node(
            "dual_element",
            "Dual Element",
            "Weave two elements into a single spell.",
            tier=2,
            cost=2,
            prerequisites=("elemental_affinity",),
            bonuses=(
                SpecializationBonus(
                    type=Bonus.UNIQUE_ABILITY,
                    value="dual_element_fusion",
                    description=(
                        "Can combine fire+ice, fire+lightning, or ice+lightning "
                        "for unique effects"
                    ),
                ),
            ),
            icon="zap",
            color="#6644ff",
            position=(2, 2),
        ),
    ],
    connections=[
        SkillTreeConnection(from_node_id="elemental_affinity", to_node_id="dual_element"),
    ],
    tiers=[
        SpecializationTier(tier=1, name="Apprentice", required_points=0),
        SpecializationTier(tier=2, name="Elementalist", required_points=1),
    ],
    unlock_requirements=[
        SpecializationRequirement(
            type="attribute", target="intelligence", value=14,
            description="Requires 14 Intelligence",
        ),
    ],
    max_points=8,
)

DIPLOMATIC_INFLUENCE = SpecializationTree(
    id="diplomatic_influence",
    name="Diplomatic Influence",
    description="Master the arts of persuasion, negotiation, and social manipulation.",
    category="social",
    nodes=[
        _tree_node(
            "silver_tongue",
            "Silver Tongue",
            "Your words carry unusual weight.",
            tier=1,
            cost=1,
            bonuses=(
                SpecializationBonus(
                    type=Bonus.NARRATIVE_INFLUENCE,
                    value=15,
                    description="+15% success chance on persuasion attempts",
                ),
            ),
            icon="message-circle",
            color="#44ff88",
            position=(2, 1),
        ),
    ],
    tiers=[SpecializationTier(tier=1, name="Smooth Talker", required_points=0)],
    unlock_requirements=[
        SpecializationRequirement(
            type="attribute", target="charisma", value=13,
            description="Requires 13 Charisma",
        ),
    ],
    max_points=5,
)

DEFAULT_SPECIALIZATION_TREES: tuple[SpecializationTree, ...] = (
    BERSERKER_PATH,
    ELEMENTAL_MASTERY,
    DIPLOMATIC_INFLUENCE,
)


def get_specialization_tree_by_id(tree_id: str) -> SpecializationTree | None:
    """Look up a default specialization tree; returns None for unknown or empty ids."""
    if not tree_id or not isinstance(tree_id, str):
        logger.warning("Invalid specialization tree ID", tree_id=tree_id)
        return None
    tree = next((t for t in DEFAULT_SPECIALIZATION_TREES if t.id == tree_id), None)
    return tree.model_copy(deep=True) if tree is not None else None


__all__ = [
    "COMBAT_SKILL_TREE",
    "MAGIC_SKILL_TREE",
    "CRAFTING_SKILL_TREE",
    "DEFAULT_SKILL_TREES",
    "DEFAULT_SPECIALIZATIONS",
    "get_skill_tree_by_id",
    "get_specialization_by_id",
    "BERSERKER_PATH",
    "ELEMENTAL_MASTERY",
    "DIPLOMATIC_INFLUENCE",
    "DEFAULT_SPECIALIZATION_TREES",
    "get_specialization_tree_by_id",
]
