"""
Resource consumption resolver.

Validates and deducts the external resource an item usage requires:
ammunition (on attack rolls), character attributes, materials and the
charges of another item (when the item card is played).

Planning is pure: `plan_consumption` reads the item and actor and either
raises a resource error or returns the single mutation to apply. Only
`consume_resource` talks to the entity store.
"""

from typing import Any, Optional

from catchery import log_debug
from pydantic import BaseModel, ConfigDict, Field

from rulecore.actions.classifier import is_ammunition, main_resource
from rulecore.actions.interfaces import EntityStore
from rulecore.character import Character
from rulecore.core.config import RulesConfig
from rulecore.core.constants import (
    ActionType,
    Availability,
    ConsumeKind,
    ConsumePhase,
    ResourcePoolKey,
    UsePeriod,
)
from rulecore.core.error_handling import (
    ConsumeTargetNotFound,
    InsufficientResource,
    MissingConsumeTarget,
)
from rulecore.core.utils import get_property
from rulecore.items import (
    ActivatedItem,
    Consumable,
    Item,
    Loot,
    PhysicalItem,
    Superpower,
)


class ConsumptionResult(BaseModel):
    """The outcome of a resource consumption attempt."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    performed: bool = Field(
        default=False,
        description="False when nothing had to be consumed in this phase.",
    )
    kind: Optional[ConsumeKind] = Field(default=None)
    target: Optional[str] = Field(default=None)
    amount: int = Field(default=0)
    previous: int = Field(default=0)
    remaining: int = Field(default=0)
    consumed_item: Optional[Any] = Field(
        default=None,
        description="The item that was consumed from (ammo, material, charges).",
    )
    label: str = Field(default="", description="Display name of the resource.")

    @property
    def summary(self) -> str:
        if not self.performed:
            return ""
        name = self.label or getattr(self.consumed_item, "name", None) or self.target
        return f"{self.amount} {name} ({self.previous} → {self.remaining})"


class ConsumptionPlan(BaseModel):
    """The single mutation that pays for an item usage."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: ConsumeKind
    target: str
    amount: int
    quantity: int
    entity: Any = Field(description="The character or item to update.")
    path: str = Field(description="The field to update on the entity.")
    consumed_item: Optional[Any] = Field(default=None)
    label: str = Field(default="")

    @property
    def remaining(self) -> int:
        return max(self.quantity - self.amount, 0)


def _phase_matches(kind: ConsumeKind, phase: ConsumePhase) -> bool:
    if kind == ConsumeKind.AMMO:
        return phase == ConsumePhase.ATTACK
    return phase == ConsumePhase.CARD


def _resolve_quantity(
    item: ActivatedItem, actor: Optional[Character]
) -> tuple[Any, Optional[Item], str, Optional[int]]:
    """
    Finds the consumed entity and how much of it is available.

    Returns:
        The entity to update, the consumed item (if any), the field path on
        the entity and the available quantity (None when the target cannot be
        resolved).

    """
    kind = item.consume.type
    target = item.consume.target or ""
    if actor is None:
        return None, None, "", None

    if kind == ConsumeKind.ATTRIBUTE:
        value = get_property(actor, target)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return actor, None, target, None
        return actor, None, target, int(value)

    consumed = actor.get_item(target)
    if consumed is None:
        return None, None, "", None

    if kind == ConsumeKind.CHARGES:
        uses = getattr(consumed, "uses", None)
        return consumed, consumed, "uses.value", uses.value if uses else 0

    quantity = consumed.quantity if isinstance(consumed, PhysicalItem) else 0
    return consumed, consumed, "quantity", quantity


def plan_consumption(
    item: Item,
    actor: Optional[Character],
    phase: ConsumePhase,
) -> Optional[ConsumptionPlan]:
    """
    Decides what an item usage consumes, without changing anything.

    Ammunition is only consumed in the attack phase and every other kind only
    in the card phase; in the other phase this returns None, so callers can
    invoke consumption at both points.

    Args:
        item (Item): The item being used.
        actor (Optional[Character]): The owner of the item.
        phase (ConsumePhase): The moment of the usage.

    Returns:
        Optional[ConsumptionPlan]: The mutation to apply, or None if nothing is consumed now.

    Raises:
        MissingConsumeTarget: If a consumption kind is set without a target.
        ConsumeTargetNotFound: If the target cannot be resolved.
        InsufficientResource: If the target holds less than the amount.

    """
    if not isinstance(item, ActivatedItem) or item.consume.type is None:
        return None
    kind = item.consume.type
    if not _phase_matches(kind, phase):
        return None

    context = {"item": item.name, "kind": kind.value, "target": item.consume.target}
    if not item.consume.target:
        raise MissingConsumeTarget(
            f"{item.name} is configured to consume {kind.display_name.lower()} "
            "but no resource is selected",
            context,
        )

    entity, consumed, path, quantity = _resolve_quantity(item, actor)
    if entity is None or quantity is None:
        raise ConsumeTargetNotFound(
            f"The {kind.display_name.lower()} consumed by {item.name} no longer exists",
            context,
        )

    amount = item.consume.amount
    if quantity - amount < 0:
        raise InsufficientResource(
            f"{actor.name if actor else 'The owner'} does not have enough "
            f"{getattr(consumed, 'name', item.consume.target)} to use {item.name}: "
            f"{amount} needed, {quantity} left",
            {**context, "quantity": quantity, "amount": amount},
        )

    return ConsumptionPlan(
        kind=kind,
        target=item.consume.target,
        amount=amount,
        quantity=quantity,
        entity=entity,
        path=path,
        consumed_item=consumed,
    )


async def consume_resource(
    item: Item,
    actor: Optional[Character],
    phase: ConsumePhase,
    store: EntityStore,
) -> ConsumptionResult:
    """
    Validates and deducts the resource an item usage requires.

    Args:
        item (Item): The item being used.
        actor (Optional[Character]): The owner of the item.
        phase (ConsumePhase): The moment of the usage.
        store (EntityStore): Where the deduction is persisted.

    Returns:
        ConsumptionResult: What was consumed; `performed` is False when nothing was due.

    Raises:
        ResourceError: If the resource is missing or insufficient. Nothing is mutated.

    """
    plan = plan_consumption(item, actor, phase)
    if plan is None:
        return ConsumptionResult()
    return await apply_consumption(item, plan, store)


async def apply_consumption(
    item: Item, plan: ConsumptionPlan, store: EntityStore
) -> ConsumptionResult:
    """
    Persists a planned deduction.

    Args:
        item (Item): The item being used.
        plan (ConsumptionPlan): The deduction to apply.
        store (EntityStore): Where the deduction is persisted.

    Returns:
        ConsumptionResult: What was consumed.

    """
    await store.apply_mutation(plan.entity, plan.path, plan.remaining)
    log_debug(
        f"{item.name} consumed {plan.amount} {plan.kind.display_name.lower()}",
        {"item": item.name, "target": plan.target, "remaining": plan.remaining},
    )
    return ConsumptionResult(
        performed=True,
        kind=plan.kind,
        target=plan.target,
        amount=plan.amount,
        previous=plan.quantity,
        remaining=plan.remaining,
        consumed_item=plan.consumed_item,
        label=plan.label,
    )


def plan_power_cost(
    item: Item,
    actor: Optional[Character],
    spent_cost: Optional[int] = None,
    config: Optional[RulesConfig] = None,
) -> Optional[ConsumptionPlan]:
    """
    Decides what a superpower invocation draws from its owner's resource pool.

    At-will powers and unowned powers cost nothing.

    Args:
        item (Item): The superpower being used.
        actor (Optional[Character]): The owner of the power.
        spent_cost (Optional[int]): The cost spent, the item's effective cost when None.
        config (Optional[RulesConfig]): The ruleset configuration.

    Returns:
        Optional[ConsumptionPlan]: The pool deduction, or None if nothing is spent.

    Raises:
        InsufficientResource: If the pool holds less than the cost.

    """
    if not isinstance(item, Superpower) or actor is None:
        return None
    if item.availability == Availability.AT_WILL:
        return None
    pool_key = main_resource(item, config)
    if pool_key is None:
        return None
    cost = spent_cost or item.effective_cost
    if cost <= 0:
        return None

    pool = actor.resources.get(pool_key)
    path = f"resources.{pool_key.value}.value"
    if pool.value - cost < 0:
        raise InsufficientResource(
            f"{actor.name} does not have enough {pool_key.value} to use {item.name}: "
            f"{cost} needed, {pool.value} left",
            {"item": item.name, "pool": pool_key.value, "quantity": pool.value, "amount": cost},
        )
    return ConsumptionPlan(
        kind=ConsumeKind.ATTRIBUTE,
        target=path,
        amount=cost,
        quantity=pool.value,
        entity=actor,
        path=path,
        label=pool_key.value,
    )


def chain_plans(item: Item, plans: list[ConsumptionPlan]) -> list[ConsumptionPlan]:
    """
    Chains the deductions that draw from the same field.

    A plan that shares its entity and field with an earlier one starts from
    what the earlier one leaves, so the field must hold the sum of their
    amounts.

    Args:
        item (Item): The item being used.
        plans (list[ConsumptionPlan]): The deductions, in the order they are applied.

    Returns:
        list[ConsumptionPlan]: The deductions, each one starting from the right value.

    Raises:
        InsufficientResource: If a shared field holds less than the combined amount.

    """
    chained: list[ConsumptionPlan] = []
    left: dict[tuple[int, str], int] = {}
    for plan in plans:
        key = (id(plan.entity), plan.path)
        if key in left:
            quantity = left[key]
            if quantity - plan.amount < 0:
                name = plan.label or getattr(plan.consumed_item, "name", plan.target)
                raise InsufficientResource(
                    f"Not enough {name} left to pay every cost of {item.name}: "
                    f"{plan.amount} more needed, {quantity} left",
                    {
                        "item": item.name,
                        "target": plan.target,
                        "quantity": quantity,
                        "amount": plan.amount,
                    },
                )
            plan = plan.model_copy(update={"quantity": quantity})
        left[key] = plan.remaining
        chained.append(plan)
    return chained


def get_consumption_targets(
    item: Item, actor: Optional[Character]
) -> dict[str, str]:
    """
    Lists the valid consumption targets on the owner for the item's consume kind.

    Args:
        item (Item): The item whose consumption is being configured.
        actor (Optional[Character]): The owner of the item.

    Returns:
        dict[str, str]: Target reference mapped to a display label.

    """
    if not isinstance(item, ActivatedItem) or item.consume.type is None or actor is None:
        return {}
    kind = item.consume.type
    targets: dict[str, str] = {}

    if kind == ConsumeKind.AMMO:
        for owned in actor.items:
            if is_ammunition(owned):
                targets[owned.id] = f"{owned.name} ({owned.quantity})"

    elif kind == ConsumeKind.ATTRIBUTE:
        for key, value in (actor.attributes.model_extra or {}).items():
            if isinstance(value, dict) and "value" in value:
                targets[f"attributes.{key}.value"] = f"attributes.{key}.value"
        for pool in ResourcePoolKey:
            path = f"resources.{pool.value}.value"
            targets[path] = path

    elif kind == ConsumeKind.MATERIAL:
        for owned in actor.items:
            if isinstance(owned, Loot) or (
                isinstance(owned, Consumable) and owned.action_type == ActionType.NONE
            ):
                targets[owned.id] = f"{owned.name} ({owned.quantity})"

    elif kind == ConsumeKind.CHARGES:
        for owned in actor.items:
            uses = getattr(owned, "uses", None)
            if uses is None or uses.per is None or not uses.max:
                continue
            if uses.per == UsePeriod.CHARGES:
                targets[owned.id] = f"{owned.name} ({uses.value} Charges)"
            else:
                targets[owned.id] = f"{owned.name} ({uses.max} per {uses.per.value})"

    return targets
