"""Load and compile the automation config file.

Example config (.github/automation.yml):

    issue_repo:
      owner: acme
      name: tracker
    project:
      owner: acme
      name: Roadmap
      status_field: Status
      status_order: [Backlog, Ready, In Progress, In review, Completed]
    labels:
      ready_for_review: Ready For Review
    rules:
      - on:
          event: pull_request
          actions: [opened, reopened]
        do:
          - ensure_issue_in_project: true
          - ensure_status_at_least: In Progress
          - assign_issue_to_pr_author: true
          - audit_on_change: true
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from board_sync.config_schema import AutomationConfig, LabelsConfig, ProjectConfig
from board_sync.core.errors import ConfigInvalidError
from board_sync.core.rules import (
    AddLabelIfMissing,
    AssignIssueToAuthor,
    AuditOnChange,
    Effect,
    EnsureStatusAtLeast,
    EnsureTracked,
    RemoveLabelsIfPresent,
    Rule,
)
from board_sync.core.status_order import StatusOrder

DEFAULT_CONFIG_PATH = ".github/automation.yml"


@dataclass(frozen=True)
class LoadedConfig:
    """Validated configuration with rules compiled into typed effects."""

    issue_owner: str
    issue_repo: str
    project: ProjectConfig
    labels: LabelsConfig
    status_order: StatusOrder
    rules: tuple[Rule, ...]


def _expect_bool(value: Any, location: str) -> bool:
    if not isinstance(value, bool):
        msg = f"Config validation failed: {location} must be true or false"
        raise ConfigInvalidError(msg)
    return value


def _expect_string(value: Any, location: str) -> str:
    if not isinstance(value, str) or not value.strip():
        msg = f"Config validation failed: {location} must be a non-empty string"
        raise ConfigInvalidError(msg)
    return value


def _expect_strings(value: Any, location: str) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not value:
        msg = f"Config validation failed: {location} must be a non-empty list of strings"
        raise ConfigInvalidError(msg)
    return tuple(_expect_string(item, location) for item in value)


def parse_effect(raw: dict[str, Any], location: str, labels: LabelsConfig) -> Effect:
    """Compile one `do:` entry into its effect type.

    Raises:
        ConfigInvalidError: If the entry is not a single known effect key
    """
    if len(raw) != 1:
        msg = f"Config validation failed: {location} must contain exactly one effect"
        raise ConfigInvalidError(msg)

    key, value = next(iter(raw.items()))
    where = f"{location}.{key}"
    match key:
        case "ensure_issue_in_project":
            return EnsureTracked(enabled=_expect_bool(value, where))
        case "ensure_status_at_least":
            return EnsureStatusAtLeast(status=_expect_string(value, where))
        case "add_pr_label_if_missing":
            if isinstance(value, dict):
                label = _expect_string(value.get("name"), f"{where}.name")
                any_of = value.get("any_of")
                aliases = _expect_strings(any_of, f"{where}.any_of") if any_of else ()
            else:
                label = _expect_string(value, where)
                aliases = ()
            if not aliases and label == labels.ready_for_review and labels.ready_for_review_any:
                aliases = tuple(labels.ready_for_review_any)
            return AddLabelIfMissing(label=label, aliases=aliases)
        case "remove_pr_labels_if_present":
            return RemoveLabelsIfPresent(labels=_expect_strings(value, where))
        case "assign_issue_to_pr_author":
            return AssignIssueToAuthor(enabled=_expect_bool(value, where))
        case "audit_on_change":
            return AuditOnChange(enabled=_expect_bool(value, where))
        case _:
            msg = f"Config validation failed: {location} has unknown effect '{key}'"
            raise ConfigInvalidError(msg)


def compile_config(settings: AutomationConfig) -> LoadedConfig:
    """Turn validated settings into a LoadedConfig.

    Every status a rule mentions must appear in project.status_order.

    Raises:
        ConfigInvalidError: On unknown effects or statuses
    """
    status_order = StatusOrder.of(settings.project.status_order)

    rules: list[Rule] = []
    for index, rule_config in enumerate(settings.rules):
        effects = tuple(
            parse_effect(raw, f"rules[{index}].do[{position}]", settings.labels)
            for position, raw in enumerate(rule_config.do)
        )
        for effect in effects:
            if isinstance(effect, EnsureStatusAtLeast) and effect.status not in status_order:
                msg = (
                    f"Config validation failed: rules[{index}] references status "
                    f"'{effect.status}' which is not in project.status_order"
                )
                raise ConfigInvalidError(msg)
        rules.append(
            Rule(
                event=rule_config.on.event,
                actions=frozenset(rule_config.on.actions),
                effects=effects,
            )
        )

    return LoadedConfig(
        issue_owner=settings.issue_repo.owner,
        issue_repo=settings.issue_repo.name,
        project=settings.project,
        labels=settings.labels,
        status_order=status_order,
        rules=tuple(rules),
    )


def resolve_config_path(config_path: str, workspace: Path) -> Path:
    """Resolve a possibly relative config path against the workspace root."""
    path = Path(config_path)
    if path.is_absolute():
        return path
    return workspace / path


def load_config(path: Path) -> LoadedConfig:
    """Load, validate and compile the YAML config at path.

    Raises:
        ConfigInvalidError: If the file is missing, is not valid YAML, or fails
            validation
    """
    if not path.exists():
        msg = f"Config file not found at {path}"
        raise ConfigInvalidError(msg)

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Config file is not valid YAML: {e}"
        raise ConfigInvalidError(msg) from e

    if not isinstance(data, dict):
        msg = "Config file is empty or invalid YAML"
        raise ConfigInvalidError(msg)

    try:
        settings = AutomationConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Config validation failed: {e}"
        raise ConfigInvalidError(msg) from e

    return compile_config(settings)
