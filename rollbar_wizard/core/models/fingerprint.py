"""
Project fingerprint — the structural snapshot of a target project.

Produced once per run by the project inspector and never mutated.
Every mutation-engine decision is a function of this snapshot plus
the wizard config.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PackageManager = Literal["npm", "yarn", "pnpm"]
RouterType = Literal["app", "pages", "both"]


class ProjectFingerprint(BaseModel):
    """Read-only description of a Next.js project's layout."""

    model_config = ConfigDict(frozen=True)

    has_package_json: bool = False
    has_typescript: bool = False

    # Routing style: either convention, under the root or under src/
    has_app_router: bool = False
    has_pages_router: bool = False
    has_root_app_dir: bool = False
    has_root_pages_dir: bool = False
    has_src_dir: bool = False

    package_manager: PackageManager = "npm"
    next_version: str = "unknown"
    next_version_bucket: str = "none"
    is_esm: bool = False

    # Well-known files present at inspection time (relative paths)
    existing_files: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def has_root_routing_dir(self) -> bool:
        return self.has_root_app_dir or self.has_root_pages_dir

    @property
    def source_ext(self) -> str:
        """Extension for plain modules in the project's language variant."""
        return "ts" if self.has_typescript else "js"

    @property
    def component_ext(self) -> str:
        """Extension for JSX modules in the project's language variant."""
        return "tsx" if self.has_typescript else "jsx"

    def router_type_hint(self) -> RouterType | None:
        """Router type implied by the layout, or None when nothing is detected."""
        if self.has_app_router and self.has_pages_router:
            return "both"
        if self.has_app_router:
            return "app"
        if self.has_pages_router:
            return "pages"
        return None
