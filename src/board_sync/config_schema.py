"""Configuration schema definitions.

Models for the automation YAML file. They validate structure only; effect
entries stay raw mappings here and are compiled into typed effects by
board_sync.config.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _non_empty(value: str, name: str) -> str:
    if not value.strip():
        msg = f"{name} must be a non-empty string"
        raise ValueError(msg)
    return value


class IssueRepoConfig(BaseModel):
    """Repository that holds the issues PRs link to."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @field_validator("owner", "name")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        return _non_empty(v, "issue_repo field")


class ProjectConfig(BaseModel):
    """Project board selector and status field layout."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str | None = None
    number: Annotated[int, Field(gt=0)] | None = None
    status_field: str
    status_order: list[str] = Field(min_length=1)

    @field_validator("owner", "status_field")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        return _non_empty(v, "project field")

    @field_validator("status_order")
    @classmethod
    def validate_status_order(cls, v: list[str]) -> list[str]:
        duplicates = sorted({name for name in v if v.count(name) > 1})
        if duplicates:
            msg = f"status_order lists statuses more than once: {', '.join(duplicates)}"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_selector(self) -> "ProjectConfig":
        if self.name is None and self.number is None:
            msg = "project.name or project.number must be provided"
            raise ValueError(msg)
        return self


class LabelsConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    ready_for_review: str
    ready_for_review_any: list[str] | None = None


class TriggerConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    event: str
    actions: list[str] = Field(min_length=1)


class RuleConfig(BaseModel):
    """One rule: `on` selects events, `do` lists effects in order."""

    model_config = ConfigDict(frozen=True)

    on: TriggerConfig
    do: list[dict[str, Any]]

    @model_validator(mode="before")
    @classmethod
    def normalize_on_key(cls, data: Any) -> Any:
        # YAML 1.1 loaders read a bare `on:` key as the boolean True
        if isinstance(data, dict) and True in data and "on" not in data:
            return {("on" if key is True else key): value for key, value in data.items()}
        return data


class AutomationConfig(BaseModel):
    """Complete automation YAML structure."""

    model_config = ConfigDict(frozen=True)

    issue_repo: IssueRepoConfig
    project: ProjectConfig
    labels: LabelsConfig
    rules: list[RuleConfig]
