"""
Ability use workflow.

Drives one usage of an item through its states:

    Idle -> Classifying -> (ConfiguringChoice) -> Consuming -> (Scaling)
         -> Rolling -> Reporting -> Done

A cancelled choice or a failed resource check ends the usage in Aborted.
The only suspension points are the choice collection and the entity store
mutations; two usages against the same actor's pool are not serialized.
"""

from typing import Optional

from catchery import log_debug
from pydantic import BaseModel, ConfigDict, Field

from rulecore.actions.area import area_scale, build_area_request
from rulecore.actions.classifier import ItemCapabilities, classify
from rulecore.actions.consumption import (
    ConsumptionPlan,
    apply_consumption,
    chain_plans,
    plan_consumption,
    plan_power_cost,
)
from rulecore.actions.interfaces import (
    AreaEffectRequest,
    UsageChoice,
    WorkflowContext,
)
from rulecore.actions.labels import ItemLabels, build_item_labels
from rulecore.actions.rolls import (
    ComposedRoll,
    compose_attack_roll,
    compose_damage_roll,
    get_roll_data,
    resolve_max_uses,
)
from rulecore.actions.saves import resolve_save_dc
from rulecore.actions.scaling import scale_item_damage
from rulecore.character import Character
from rulecore.core.constants import Availability, ConsumeKind, ConsumePhase, NiceEnum
from rulecore.core.dice_parser import RollBreakdown
from rulecore.core.error_handling import ResourceError, configuration_error
from rulecore.items import ActivatedItem, Consumable, Feature, Item, Superpower


class WorkflowState(NiceEnum):
    """The states of an item usage."""

    IDLE = "idle"
    CLASSIFYING = "classifying"
    CONFIGURING_CHOICE = "configuring_choice"
    CONSUMING = "consuming"
    SCALING = "scaling"
    ROLLING = "rolling"
    REPORTING = "reporting"
    DONE = "done"
    ABORTED = "aborted"


class WorkflowOptions(BaseModel):
    """Caller options of an item usage."""

    configure_dialog: bool = Field(
        default=True,
        description="Ask the player how to use the item when there is a choice.",
    )
    spent_cost: Optional[int] = Field(
        default=None,
        description="Resource spent on a superpower, at least its base cost.",
    )
    target_type: Optional[str] = Field(
        default=None,
        description="Override of the target type of the area, e.g. 'line'.",
    )
    roll_attack: bool = Field(default=True, description="Roll the attack, if any.")
    roll_damage: bool = Field(default=True, description="Roll the damage, if any.")


class RollOutcome(BaseModel):
    """An evaluated roll, as shown on the usage report."""

    title: str
    flavor: str
    formula: str
    total: int
    breakdown: RollBreakdown

    @classmethod
    def from_roll(cls, roll: ComposedRoll, breakdown: RollBreakdown) -> "RollOutcome":
        return cls(
            title=roll.title,
            flavor=roll.flavor,
            formula=roll.formula,
            total=breakdown.value,
            breakdown=breakdown,
        )


class UsageReport(BaseModel):
    """The structured result of an item usage, rendered by the chat layer."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    item_id: str
    item_name: str
    actor_name: Optional[str] = Field(default=None)
    success: bool = Field(default=False)
    state: WorkflowState = Field(default=WorkflowState.IDLE)
    capabilities: Optional[ItemCapabilities] = Field(default=None)
    choice: Optional[UsageChoice] = Field(default=None)
    labels: Optional[ItemLabels] = Field(default=None)
    save_dc: Optional[int] = Field(default=None)
    spent_cost: Optional[int] = Field(default=None)
    damage_parts: list[str] = Field(
        default_factory=list,
        description="The damage formulas after scaling.",
    )
    attack: Optional[RollOutcome] = Field(default=None)
    damage: Optional[RollOutcome] = Field(default=None)
    consumed: list[str] = Field(
        default_factory=list,
        description="One line per resource spent.",
    )
    notes: list[str] = Field(default_factory=list)
    area_request: Optional[AreaEffectRequest] = Field(default=None)
    item_destroyed: bool = Field(default=False)
    aborted_reason: str = Field(default="")


class AbilityUseWorkflow:
    """
    One usage of an item by its owner.

    The workflow is single use: create a new one for every usage.
    """

    def __init__(
        self,
        item: Item,
        actor: Optional[Character],
        context: Optional[WorkflowContext] = None,
        options: Optional[WorkflowOptions] = None,
    ) -> None:
        self.item = item
        self.actor = actor
        self.context = context or WorkflowContext()
        self.options = options or WorkflowOptions()
        self.state = WorkflowState.IDLE
        self.history: list[WorkflowState] = [WorkflowState.IDLE]
        self.report = UsageReport(
            item_id=item.id,
            item_name=item.name,
            actor_name=actor.name if actor else None,
        )
        self._ammo: Optional[Item] = None

    def _transition(self, state: WorkflowState) -> None:
        log_debug(
            f"{self.item.name}: {self.state.display_name} → {state.display_name}",
            {"item": self.item.name, "from": self.state.value, "to": state.value},
        )
        self.state = state
        self.history.append(state)
        self.report.state = state

    def _abort(self, reason: str) -> UsageReport:
        self.report.aborted_reason = reason
        self.report.success = False
        self._transition(WorkflowState.ABORTED)
        return self.report

    # ============================================================================
    # CLASSIFYING
    # ============================================================================

    def _spent_cost(self) -> Optional[int]:
        if not isinstance(self.item, Superpower):
            return None
        spent = self.options.spent_cost
        if spent is not None and spent < self.item.cost:
            raise configuration_error(
                f"Cannot spend {spent} on {self.item.name}, it costs {self.item.cost}",
                {"item": self.item.name, "spent_cost": spent, "cost": self.item.cost},
            )
        return spent if spent is not None else self.item.spent_cost

    def _has_use_cost(self, capabilities: ItemCapabilities) -> bool:
        if capabilities.uses_recharge or capabilities.uses_charges:
            return True
        if isinstance(self.item, Consumable):
            return True
        return (
            isinstance(self.item, Superpower)
            and self.actor is not None
            and self.item.availability != Availability.AT_WILL
            and capabilities.main_resource is not None
        )

    def _needs_choice(self, capabilities: ItemCapabilities) -> bool:
        if not self.options.configure_dialog:
            return False
        return self._has_use_cost(capabilities) or capabilities.has_placeable_area

    # ============================================================================
    # CONSUMING
    # ============================================================================

    async def _spend_use(self, capabilities: ItemCapabilities) -> None:
        """Spends the recharge or one limited use of the item."""
        item = self.item
        if not isinstance(item, ActivatedItem):
            return
        store = self.context.store

        if capabilities.uses_recharge:
            await store.apply_mutation(item, "recharge.charged", False)
            self.report.consumed.append("recharge")
            return

        if isinstance(item, Consumable):
            await self._spend_consumable(item, capabilities)
            return

        if capabilities.uses_charges:
            remaining = max(item.uses.value - 1, 0)
            await store.apply_mutation(item, "uses.value", remaining)
            self.report.consumed.append(f"1 use ({item.uses.value} → {remaining})")

    async def _spend_consumable(
        self, item: Consumable, capabilities: ItemCapabilities
    ) -> None:
        store = self.context.store
        current = item.uses.value
        remaining = max(current - 1, 0) if capabilities.uses_charges else current
        quantity = item.quantity

        if remaining:
            await store.apply_mutation(item, "uses.value", remaining)
            self.report.consumed.append(f"1 charge ({current} → {remaining})")
        elif quantity > 1:
            refill = resolve_max_uses(item, self.actor, self.context.evaluator)
            await store.apply_mutation(item, "quantity", quantity - 1)
            await store.apply_mutation(item, "uses.value", refill)
            self.report.consumed.append(f"1 {item.name} ({quantity} → {quantity - 1})")
        elif quantity <= 1 and item.uses.auto_destroy and self.actor is not None:
            await store.delete_item(self.actor, item)
            self.report.item_destroyed = True
            self.report.consumed.append(f"1 {item.name} (destroyed)")
        elif quantity == 1:
            await store.apply_mutation(item, "quantity", 0)
            await store.apply_mutation(item, "uses.value", 0)
            self.report.consumed.append(f"1 {item.name} (1 → 0)")
        else:
            message = f"{item.name} has no uses left"
            self.context.notifier.warn(message)
            self.report.notes.append(message)

    def _plan_resources(self, choice: UsageChoice) -> list[ConsumptionPlan]:
        """Checks every external resource before any of them is deducted."""
        plans: list[Optional[ConsumptionPlan]] = []
        if choice.consume:
            plans.append(
                plan_power_cost(
                    self.item, self.actor, self.report.spent_cost, self.context.config
                )
            )
        plans.append(plan_consumption(self.item, self.actor, ConsumePhase.CARD))
        if self.report.capabilities.has_attack and self.options.roll_attack:
            plans.append(plan_consumption(self.item, self.actor, ConsumePhase.ATTACK))
        return chain_plans(self.item, [plan for plan in plans if plan is not None])

    async def _consume(self, choice: UsageChoice) -> None:
        capabilities = self.report.capabilities
        if choice.consume:
            await self._spend_use(capabilities)

        for plan in self._plan_resources(choice):
            result = await apply_consumption(self.item, plan, self.context.store)
            self.report.consumed.append(result.summary)
            if plan.kind == ConsumeKind.AMMO:
                self._ammo = plan.consumed_item

    def _place_area(self, choice: UsageChoice) -> None:
        if not (choice.place_area and self.report.capabilities.has_placeable_area):
            return
        item = self.item
        target_type = choice.target_type or self.options.target_type
        scale = area_scale(item, self.report.spent_cost, self.context.config)
        request = build_area_request(
            item, scale, target_type, self.context.config, self.context.notifier
        )
        if request is None:
            return
        self.report.area_request = request
        self.context.placer.place_area_effect(request)

    # ============================================================================
    # RUN
    # ============================================================================

    async def run(self) -> UsageReport:
        """
        Runs the usage to completion.

        Returns:
            UsageReport: The result; `success` is False and `aborted_reason` set
            when the player cancelled or a resource check failed.

        Raises:
            ConfigurationError: If the item data is malformed.
            FormulaError: If a roll formula cannot be evaluated.

        """
        if self.state != WorkflowState.IDLE:
            raise RuntimeError(f"The usage of {self.item.name} has already run")
        config = self.context.config

        # Classifying.
        self._transition(WorkflowState.CLASSIFYING)
        capabilities = classify(self.item, config)
        self.report.capabilities = capabilities
        self.report.spent_cost = self._spent_cost()
        self.report.save_dc = resolve_save_dc(self.item, self.actor, config)

        # Configuring the choice.
        if self._needs_choice(capabilities):
            self._transition(WorkflowState.CONFIGURING_CHOICE)
            choice = await self.context.choices.collect_usage_choice(self.item)
            if choice is None:
                return self._abort(f"The usage of {self.item.name} was cancelled")
        else:
            choice = UsageChoice(consume=True, place_area=False)
        self.report.choice = choice

        # Consuming.
        self._transition(WorkflowState.CONSUMING)
        try:
            await self._consume(choice)
        except ResourceError as e:
            self.context.notifier.warn(e.message)
            return self._abort(e.message)
        self._place_area(choice)

        # Scaling.
        if capabilities.has_damage and isinstance(self.item, (Superpower, Feature)):
            self._transition(WorkflowState.SCALING)
            self.report.damage_parts = scale_item_damage(
                self.item,
                self.actor,
                self.report.spent_cost,
                get_roll_data(self.item, self.actor, config, self.report.spent_cost),
                config,
            )
        elif capabilities.has_damage:
            self.report.damage_parts = [part.formula for part in self.item.damage]

        # Rolling.
        self._transition(WorkflowState.ROLLING)
        evaluator = self.context.evaluator
        if capabilities.has_attack and self.options.roll_attack:
            roll = compose_attack_roll(self.item, self.actor, config)
            self.report.attack = RollOutcome.from_roll(roll, roll.roll(evaluator))
        if capabilities.has_damage and self.options.roll_damage:
            roll = compose_damage_roll(
                self.item,
                self.actor,
                self.report.spent_cost,
                self._ammo,
                config,
                scaled_parts=self.report.damage_parts,
            )
            self.report.damage = RollOutcome.from_roll(roll, roll.roll(evaluator))

        # Reporting.
        self._transition(WorkflowState.REPORTING)
        self.report.labels = build_item_labels(self.item, self.actor, config)
        self.report.consumed = [line for line in self.report.consumed if line]
        self.report.success = True

        self._transition(WorkflowState.DONE)
        return self.report


async def run_ability_use_workflow(
    item: Item,
    actor: Optional[Character],
    options: Optional[WorkflowOptions] = None,
    context: Optional[WorkflowContext] = None,
) -> UsageReport:
    """
    Uses an item on behalf of its owner.

    Args:
        item (Item): The item to use.
        actor (Optional[Character]): The owner of the item.
        options (Optional[WorkflowOptions]): Caller options.
        context (Optional[WorkflowContext]): The collaborators of the usage.

    Returns:
        UsageReport: The result of the usage.

    """
    return await AbilityUseWorkflow(item, actor, context, options).run()
