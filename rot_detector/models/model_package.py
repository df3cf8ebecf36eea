from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rot_detector.models.common import ensure_utc


class Maintainer(BaseModel):
    """A package maintainer as listed by the registry."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str | None = None


class PackageMetadata(BaseModel):
    """Package metadata fetched from an ecosystem registry."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Package name")
    version: str = Field(default="", description="Latest published version")
    last_published: datetime | None = Field(default=None, description="Last publish timestamp")
    maintainers: list[Maintainer] = Field(default_factory=list)
    license: str | None = Field(default=None, description="License identifier or free text")
    repository_url: str | None = Field(default=None, description="Source repository URL")
    homepage: str | None = None
    description: str | None = None

    @field_validator("last_published")
    @classmethod
    def _as_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)


class RepositoryHealth(BaseModel):
    """Supplemental signals from the source-hosting platform."""

    model_config = ConfigDict(frozen=True)

    last_commit_date: datetime | None = Field(default=None, description="Latest commit timestamp")
    contributor_count: int = Field(default=0, ge=0)
    open_issues: int = Field(default=0, ge=0)
    stars: int = Field(default=0, ge=0)
    is_archived: bool = Field(default=False, description="Repository is read-only/archived")

    @field_validator("last_commit_date")
    @classmethod
    def _as_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)
