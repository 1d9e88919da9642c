"""Pydantic models for API requests and responses."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PlanOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    include_modules: Optional[List[str]] = Field(default=None, alias="includeModules")
    exclude_modules: Optional[List[str]] = Field(default=None, alias="excludeModules")
    exclude_objects: Optional[List[str]] = Field(default=None, alias="excludeObjects")
    include_interfaces: bool = Field(default=True, alias="includeInterfaces")
    include_config: bool = Field(default=True, alias="includeConfig")

    def to_planner_options(self) -> Dict[str, Any]:
        """camelCase options as understood by ``MigrationPlanner.plan``."""
        return self.model_dump(by_alias=True, exclude_none=True)


class PlanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    forensic_result: Optional[Dict[str, Any]] = Field(default=None, alias="forensicResult")
    options: PlanOptions = Field(default_factory=PlanOptions)


class EventHistoryResponse(BaseModel):
    events: List[Dict[str, Any]]
    clients: int
