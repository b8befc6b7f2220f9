"""Declarative rules and the reducer that compiles them into an action plan.

A rule pairs a trigger (event name + accepted actions) with an ordered list of
effects. For one incoming event, every matching rule's effects are folded, in
declaration order, into a single ActionPlan.

Merge semantics:
- label-to-add, assign, tracked and audit flags: last writer wins. Two matching
  rules that both set a label-to-add let the later rule win silently; keeping
  those rules consistent is up to the rule author.
- status targets: merged with StatusOrder.max, so the plan never asks for a
  lower status than any matching rule demanded.
- labels-to-remove: concatenated, skipping names already listed.
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace

from board_sync.core.status_order import StatusOrder


@dataclass(frozen=True)
class EnsureTracked:
    """Add the linked issue to the project if it is not there yet."""

    enabled: bool = True


@dataclass(frozen=True)
class EnsureStatusAtLeast:
    """Advance the linked item's status to at least this status."""

    status: str


@dataclass(frozen=True)
class AddLabelIfMissing:
    """Add a PR label unless it (or any alias) is already present."""

    label: str
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class RemoveLabelsIfPresent:
    """Remove each of these PR labels that is present."""

    labels: tuple[str, ...]


@dataclass(frozen=True)
class AssignIssueToAuthor:
    """Assign the PR author to the linked issue."""

    enabled: bool = True


@dataclass(frozen=True)
class AuditOnChange:
    """Post an audit comment on the issue for every applied change."""

    enabled: bool = True


Effect = (
    EnsureTracked
    | EnsureStatusAtLeast
    | AddLabelIfMissing
    | RemoveLabelsIfPresent
    | AssignIssueToAuthor
    | AuditOnChange
)


@dataclass(frozen=True)
class Rule:
    event: str
    actions: frozenset[str]
    effects: tuple[Effect, ...]

    def matches(self, event_name: str, action: str) -> bool:
        return self.event == event_name and action in self.actions


@dataclass(frozen=True)
class ActionPlan:
    """Fully reduced set of effects to apply for one event."""

    label_to_add: str | None = None
    label_aliases: tuple[str, ...] = ()
    labels_to_remove: tuple[str, ...] = ()
    assign_issue_to_author: bool = False
    ensure_tracked: bool = False
    target_status: str | None = None
    audit_on_change: bool = False

    @property
    def touches_project(self) -> bool:
        return self.ensure_tracked or self.target_status is not None


def apply_effect(plan: ActionPlan, effect: Effect, order: StatusOrder) -> ActionPlan:
    """Fold one effect into a plan, returning the new plan."""
    if isinstance(effect, AddLabelIfMissing):
        return replace(plan, label_to_add=effect.label, label_aliases=effect.aliases)
    if isinstance(effect, RemoveLabelsIfPresent):
        merged = list(plan.labels_to_remove)
        for label in effect.labels:
            if label not in merged:
                merged.append(label)
        return replace(plan, labels_to_remove=tuple(merged))
    if isinstance(effect, EnsureTracked):
        return replace(plan, ensure_tracked=effect.enabled)
    if isinstance(effect, AssignIssueToAuthor):
        return replace(plan, assign_issue_to_author=effect.enabled)
    if isinstance(effect, AuditOnChange):
        return replace(plan, audit_on_change=effect.enabled)
    if isinstance(effect, EnsureStatusAtLeast):
        status = order.require(effect.status)
        if plan.target_status is None:
            return replace(plan, target_status=status)
        return replace(plan, target_status=order.max(plan.target_status, status))
    msg = f"Unsupported effect: {effect!r}"
    raise TypeError(msg)


def select_rules(rules: Sequence[Rule], event_name: str, action: str) -> list[Rule]:
    return [rule for rule in rules if rule.matches(event_name, action)]


def build_action_plan(
    rules: Sequence[Rule], order: StatusOrder, event_name: str, action: str
) -> ActionPlan | None:
    """Reduce every rule matching (event_name, action) into one ActionPlan.

    Args:
        rules: Rules in declaration order
        order: Status order used to merge status targets
        event_name: GitHub event name (e.g. "pull_request")
        action: Event action verb (e.g. "opened")

    Returns:
        The merged plan, or None when no rule matches. None means "nothing to
        do", not an error.

    Raises:
        UnknownStatusError: If a matching rule names a status outside the order
    """
    matching = select_rules(rules, event_name, action)
    if not matching:
        return None

    plan = ActionPlan()
    for rule in matching:
        for effect in rule.effects:
            plan = apply_effect(plan, effect, order)
    return plan
