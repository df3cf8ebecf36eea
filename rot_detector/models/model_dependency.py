from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Ecosystem(str, Enum):
    """Supported package ecosystems."""

    NPM = "npm"
    PYPI = "pypi"


class DependencyType(str, Enum):
    """How a dependency entered the project."""

    DIRECT = "direct"
    TRANSITIVE = "transitive"


class Dependency(BaseModel):
    """A dependency declared in a manifest file."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Package name as declared in the manifest")
    version: str = Field(default="*", description="Declared version without range operators")
    type: DependencyType = Field(default=DependencyType.DIRECT)
    ecosystem: Ecosystem = Field(description="Registry the package is published to")
    is_dev: bool = Field(default=False, description="Declared as a development dependency")
