"""Project models for the ownership-scoped project collection."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class Project(BaseModel):
    """A persisted project row."""

    model_config = ConfigDict(extra="allow")

    id: str
    owner_id: str
    name: str
    description: str | None = None
    logo_url: str | None = None
    team_size: int = 1
    due_date: str | None = None
    status: str | None = None
    progress: int = 0
    tags: list[str] = Field(default_factory=list)
    priority: str = "medium"
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Columns a patch may change but never clear
NON_NULLABLE_FIELDS = frozenset({"name", "progress", "team_size", "tags", "priority"})


class ProjectCreate(BaseModel):
    """Request to create a project.

    `name` is optional here so the store reports a missing name as a
    400 with its own message.
    """

    name: str | None = None
    description: str | None = None
    logo_url: str | None = None
    team_size: int | None = Field(default=None, ge=0)  # 0 falls back to the default
    due_date: str | None = None
    tags: list[str] | None = None
    priority: str | None = None


class ProjectUpdate(BaseModel):
    """Sparse patch for a project.

    Only fields present in the request body are applied; use
    `model_dump(exclude_unset=True)` to get them.
    """

    name: str | None = None
    description: str | None = None
    logo_url: str | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    team_size: int | None = Field(default=None, ge=1)
    due_date: str | None = None
    status: str | None = None
    tags: list[str] | None = None
    priority: str | None = None

    @model_validator(mode="after")
    def _reject_null_required_fields(self) -> "ProjectUpdate":
        nulled = sorted(
            name for name in NON_NULLABLE_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self


class ProjectSnapshot(BaseModel):
    """Project state as sent by the client for prompt context."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    description: str | None = None
    progress: int | None = None
    team_size: int | None = Field(
        default=None, validation_alias=AliasChoices("team_size", "team")
    )
    due_date: str | None = Field(
        default=None, validation_alias=AliasChoices("due_date", "due")
    )
    status: str | None = None


class ProjectResponse(BaseModel):
    success: bool = True
    project: Project


class ProjectListResponse(BaseModel):
    success: bool = True
    projects: list[Project]
