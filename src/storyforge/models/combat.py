"""Pydantic V2 schemas for combat encounters.

This module defines participants, equipment, skills, items, status effects,
actions, the per-encounter ``CombatState`` aggregate, and the result objects
the combat engine returns.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any
from uuid import uuid4

from pydantic import Field, computed_field

from storyforge.models.base import StoryForgeModel
from storyforge.models.enums import (
    ActionType,
    CombatOutcome,
    CombatPhase,
    DamageType,
    DefeatConditionType,
    EffectKind,
    EnvironmentalEffectType,
    ModifiedStat,
    ModifierType,
    ParticipantType,
    StatusEffectCategory,
    StatusEffectKind,
    TargetType,
    TickTiming,
    VictoryConditionType,
)


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


# =============================================================================
# Environment
# =============================================================================


class Position(StoryForgeModel):
    """A point on the battlefield."""

    x: float
    y: float
    zone: str | None = None


class EnvironmentalEffect(StoryForgeModel):
    """An effect the battlefield applies to every action.

    Attributes:
        type: Which calculation the value feeds into.
        value: Additive modifier.
        duration: Remaining turns, -1 for permanent.
    """

    id: str = Field(default_factory=_new_id)
    name: str
    description: str = ""
    type: EnvironmentalEffectType
    value: int
    affected_zones: list[str] = Field(default_factory=list)
    duration: int = -1


class CombatEnvironment(StoryForgeModel):
    """Terrain and persistent effects of an encounter."""

    id: str = Field(default_factory=_new_id)
    name: str
    description: str = ""
    effects: list[EnvironmentalEffect] = Field(default_factory=list)
    terrain: str = "open"
    visibility: str = "clear"
    size: str = "normal"


# =============================================================================
# Status Effects
# =============================================================================


class StatusEffectModifier(StoryForgeModel):
    """A single stat change carried by a status effect.

    Health and mana modifiers are applied to the participant when the effect
    ticks. Every other stat is only read by the calculators.
    """

    stat: ModifiedStat
    type: ModifierType
    value: float


class StatusEffect(StoryForgeModel):
    """A timed, stacking modifier attached to a participant.

    Attributes:
        id: Unique instance id.
        name: Effect name; stacking is keyed on it.
        duration: Ticks remaining; reaching 0 removes the effect, -1 never expires.
        stacks: Current stack count.
        max_stacks: Stack cap enforced on re-application.
        source: Who or what applied the effect.
        can_dispel: Whether dispels may remove it.
        tick_timing: When the effect's modifiers are applied.
    """

    id: str = Field(default_factory=_new_id)
    name: str
    description: str = ""
    type: StatusEffectKind = StatusEffectKind.NEUTRAL
    category: StatusEffectCategory = StatusEffectCategory.SPECIAL
    effects: list[StatusEffectModifier] = Field(default_factory=list)
    duration: int
    stacks: Annotated[int, Field(ge=1)] = 1
    max_stacks: Annotated[int, Field(ge=1)] = 1
    source: str = ""
    can_dispel: bool = True
    tick_timing: TickTiming = TickTiming.IMMEDIATE


# =============================================================================
# Equipment, Skills, Items
# =============================================================================


class CombatWeapon(StoryForgeModel):
    """Weapon stat block."""

    id: str = Field(default_factory=_new_id)
    name: str
    type: str = "melee"
    damage: int
    accuracy: int = 0
    critical_chance: int = 0
    range: int = 1
    action_point_cost: int = 1


class CombatArmor(StoryForgeModel):
    """Armor stat block; ``resistance`` is keyed by damage type."""

    id: str = Field(default_factory=_new_id)
    name: str
    defense: int = 0
    resistance: dict[str, int] = Field(default_factory=dict)
    speed_penalty: int = 0


class SkillEffect(StoryForgeModel):
    """An effect produced by a combat skill.

    Attributes:
        type: Effect kind.
        value: Magnitude, or a status effect key for status effects.
        chance: Percent chance for status application (0-100).
        damage_type: Damage type for damage effects.
        status_effect_id: Status library key for status effects.
    """

    type: EffectKind
    value: float | str = 0
    chance: Annotated[float, Field(ge=0, le=100)] = 100
    damage_type: DamageType | None = None
    status_effect_id: str | None = None


class CombatSkill(StoryForgeModel):
    """A skill a participant can use in combat."""

    id: str = Field(default_factory=_new_id)
    name: str
    description: str = ""
    type: str = "attack"
    action_point_cost: int = 1
    mana_cost: int | None = None
    cooldown: Annotated[int, Field(ge=0)] = 0
    current_cooldown: Annotated[int, Field(ge=0)] = 0
    target_type: TargetType = TargetType.SINGLE_ENEMY
    range: int = 1
    effects: list[SkillEffect] = Field(default_factory=list)


class ItemEffect(StoryForgeModel):
    """An effect produced by a combat item."""

    type: EffectKind
    value: float | str = 0
    duration: int | None = None


class CombatItem(StoryForgeModel):
    """A consumable or tool usable in combat."""

    id: str = Field(default_factory=_new_id)
    name: str
    description: str = ""
    type: str = "consumable"
    quantity: Annotated[int, Field(ge=0)] = 1
    action_point_cost: int = 1
    target_type: TargetType = TargetType.SELF
    range: int = 1
    effects: list[ItemEffect] = Field(default_factory=list)
    usable_in_combat: bool = True
    single_use: bool = True


# =============================================================================
# Participants
# =============================================================================


class CombatParticipant(StoryForgeModel):
    """An entity taking part in an encounter.

    Participants at 0 health stay in the encounter so the history remains
    readable and resurrection stays possible.
    """

    id: str = Field(default_factory=_new_id)
    name: str
    type: ParticipantType

    health: Annotated[int, Field(ge=0)]
    max_health: Annotated[int, Field(ge=1)]
    mana: Annotated[int, Field(ge=0)] | None = None
    max_mana: Annotated[int, Field(ge=0)] | None = None

    attack: int = 10
    defense: int = 0
    speed: int = 10
    accuracy: int = 0
    evasion: int = 0
    critical_chance: int = 0
    critical_multiplier: float = 1.5

    action_points: Annotated[int, Field(ge=0)] = 3
    max_action_points: Annotated[int, Field(ge=0)] = 3
    initiative: float = 0

    status_effects: list[StatusEffect] = Field(default_factory=list)
    position: Position | None = None

    equipped_weapon: CombatWeapon | None = None
    equipped_armor: CombatArmor | None = None
    available_skills: list[CombatSkill] = Field(default_factory=list)
    available_items: list[CombatItem] = Field(default_factory=list)

    @property
    def is_alive(self) -> bool:
        """True while health is above 0."""
        return self.health > 0

    def get_skill(self, skill_id: str | None) -> CombatSkill | None:
        """Find one of this participant's skills by id."""
        return next((s for s in self.available_skills if s.id == skill_id), None)

    def get_item(self, item_id: str | None) -> CombatItem | None:
        """Find one of this participant's items by id."""
        return next((i for i in self.available_items if i.id == item_id), None)


# =============================================================================
# Actions & Conditions
# =============================================================================


class CombatAction(StoryForgeModel):
    """An action a participant intends to take."""

    id: str = Field(default_factory=_new_id)
    type: ActionType
    actor_id: str
    target_id: str | None = None
    target_position: Position | None = None
    skill_id: str | None = None
    item_id: str | None = None
    weapon_id: str | None = None
    action_point_cost: Annotated[int, Field(ge=0)] = 1
    mana_cost: Annotated[int, Field(ge=0)] | None = None


class VictoryCondition(StoryForgeModel):
    """Declarative victory predicate; ``parameters`` holds e.g. ``turns``."""

    type: VictoryConditionType
    description: str = ""
    parameters: dict[str, Any] = Field(default_factory=dict)
    completed: bool = False


class DefeatCondition(StoryForgeModel):
    """Declarative defeat predicate; ``parameters`` holds e.g. ``time_limit``."""

    type: DefeatConditionType
    description: str = ""
    parameters: dict[str, Any] = Field(default_factory=dict)
    triggered: bool = False


# =============================================================================
# Results
# =============================================================================


class DamageBreakdown(StoryForgeModel):
    """Every term that went into a damage result."""

    base_damage: int
    attribute_modifier: int
    weapon_bonus: int
    skill_bonus: int
    status_effect_modifier: float
    critical_multiplier: float
    resistance: int
    armor_reduction: int
    environmental_modifier: int


class DamageResult(StoryForgeModel):
    """Outcome of one damage calculation."""

    target_id: str
    damage_type: DamageType
    base_damage: int
    final_damage: int
    is_critical: bool
    is_blocked: bool
    breakdown: DamageBreakdown


class HealingBreakdown(StoryForgeModel):
    """Every term that went into a healing result."""

    base_healing: int
    attribute_modifier: int
    skill_bonus: int
    status_effect_modifier: int
    environmental_modifier: int


class HealingResult(StoryForgeModel):
    """Outcome of one healing calculation; ``overheal`` is the discarded excess."""

    target_id: str
    base_healing: int
    final_healing: int
    overheal: int
    breakdown: HealingBreakdown


class ManaRestoreResult(StoryForgeModel):
    """Mana restored to a target."""

    target_id: str
    amount: int


class StatusEffectApplication(StoryForgeModel):
    """A status effect an action attempted to apply."""

    target_id: str
    status_effect: StatusEffect
    success: bool
    stacks_applied: int = 1


class MovementResult(StoryForgeModel):
    """Outcome of a move action."""

    actor_id: str
    from_position: Position
    to_position: Position
    success: bool
    distance_moved: float


class StatusEffectRemoval(StoryForgeModel):
    """A status effect removed from a participant by an action."""

    target_id: str
    effect_name: str


class CombatActionResult(StoryForgeModel):
    """Audit record of a resolved action."""

    id: str = Field(default_factory=_new_id)
    action: CombatAction
    success: bool = True
    timestamp: datetime = Field(default_factory=_utcnow)
    damage_dealt: list[DamageResult] = Field(default_factory=list)
    healing_done: list[HealingResult] = Field(default_factory=list)
    mana_restored: list[ManaRestoreResult] = Field(default_factory=list)
    status_effects_applied: list[StatusEffectApplication] = Field(default_factory=list)
    status_effects_removed: list[StatusEffectRemoval] = Field(default_factory=list)
    movement_result: MovementResult | None = None
    description: str = ""


class CombatReward(StoryForgeModel):
    """A reward granted on victory."""

    type: str
    value: int
    description: str = ""


class CombatConsequence(StoryForgeModel):
    """A consequence suffered on defeat."""

    type: str
    severity: str
    description: str = ""
    duration: int = 0


class CombatEndResult(StoryForgeModel):
    """How and why an encounter ended."""

    outcome: CombatOutcome
    reason: str
    surviving_participants: list[str] = Field(default_factory=list)
    rewards: list[CombatReward] = Field(default_factory=list)
    consequences: list[CombatConsequence] = Field(default_factory=list)


# =============================================================================
# Combat State
# =============================================================================


class CombatState(StoryForgeModel):
    """State of one encounter, created at combat start and discarded at its end.

    Attributes:
        id: Unique encounter id.
        is_active: False once the encounter has ended.
        participants: Everyone in the encounter, living or not.
        current_turn_id: Id of the participant whose turn it is.
        turn_order: Initiative order fixed at combat start.
        round: Current round, starting at 1.
        environment: Optional battlefield effects.
        action_history: Append-only log of resolved actions.
        victory_conditions: Checked in order after every action.
        defeat_conditions: Checked in order after the victory conditions.
        start_time: When the encounter started.
        turn_start_time: When the current turn started.
        turn_time_limit: Optional per-turn limit in seconds.
    """

    id: str = Field(default_factory=_new_id)
    is_active: bool = True
    participants: list[CombatParticipant] = Field(default_factory=list)
    current_turn_id: str = ""
    turn_order: list[str] = Field(default_factory=list)
    round: Annotated[int, Field(ge=0)] = 1
    environment: CombatEnvironment | None = None
    action_history: list[CombatActionResult] = Field(default_factory=list)
    victory_conditions: list[VictoryCondition] = Field(default_factory=list)
    defeat_conditions: list[DefeatCondition] = Field(default_factory=list)
    start_time: datetime = Field(default_factory=_utcnow)
    turn_start_time: datetime = Field(default_factory=_utcnow)
    turn_time_limit: int | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def phase(self) -> CombatPhase:
        """Phase derived from the participant holding the turn.

        Returns:
            ENDED once inactive, INITIATIVE before a turn holder exists,
            PLAYER_TURN for a player, otherwise ENEMY_TURN.
        """
        if not self.is_active:
            return CombatPhase.ENDED
        current = self.get_participant(self.current_turn_id)
        if current is None:
            return CombatPhase.INITIATIVE
        if current.type == ParticipantType.PLAYER:
            return CombatPhase.PLAYER_TURN
        return CombatPhase.ENEMY_TURN

    def get_participant(self, participant_id: str | None) -> CombatParticipant | None:
        """Find a participant by id."""
        return next((p for p in self.participants if p.id == participant_id), None)

    def living(self, participant_type: ParticipantType | None = None) -> list[CombatParticipant]:
        """Participants with health above 0, optionally of one type."""
        return [
            p
            for p in self.participants
            if p.is_alive and (participant_type is None or p.type == participant_type)
        ]


class CombatTurnResult(StoryForgeModel):
    """Result of processing one action.

    On rejection ``success`` is False, ``error`` carries the reason and
    ``new_state`` is the unchanged input state.
    """

    success: bool
    new_state: CombatState
    action_result: CombatActionResult | None = None
    combat_end: CombatEndResult | None = None
    next_phase: CombatPhase | None = None
    error: str | None = None


__all__ = [
    "Position",
    "EnvironmentalEffect",
    "CombatEnvironment",
    "StatusEffectModifier",
    "StatusEffect",
    "CombatWeapon",
    "CombatArmor",
    "SkillEffect",
    "CombatSkill",
    "ItemEffect",
    "CombatItem",
    "CombatParticipant",
    "CombatAction",
    "VictoryCondition",
    "DefeatCondition",
    "DamageBreakdown",
    "DamageResult",
    "HealingBreakdown",
    "HealingResult",
    "ManaRestoreResult",
    "StatusEffectApplication",
    "StatusEffectRemoval",
    "MovementResult",
    "CombatActionResult",
    "CombatReward",
    "CombatConsequence",
    "CombatEndResult",
    "CombatState",
    "CombatTurnResult",
]
