"""
JSON reports printed by the CLI.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .template.elements import AnyCodeElement, CodeStructure


class CodeElementInfo(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: str = Field(..., description="Element class name")
    tag_name: Optional[str] = None
    opening_tag: Optional[str] = None
    closing_tag: Optional[str] = None
    line: str
    content: str
    children: List[CodeElementInfo] = Field(default_factory=list)


class StructureReport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    template: str
    type: str
    elements: List[CodeElementInfo]


class FilterList(BaseModel):
    model_config = ConfigDict(extra="forbid")

    filters: List[str]


CodeElementInfo.model_rebuild()


def element_info(element: AnyCodeElement) -> CodeElementInfo:
    return CodeElementInfo(
        kind=type(element).__name__,
        tag_name=element.tag_name,
        opening_tag=element.opening_tag,
        closing_tag=element.closing_tag,
        line=element.line,
        content=element.content,
        children=[element_info(child) for child in element.children],
    )


def structure_report(location: str, structure: CodeStructure) -> StructureReport:
    return StructureReport(
        template=location,
        type=structure.type,
        elements=[element_info(e) for e in structure.elements],
    )


__all__ = ["CodeElementInfo", "StructureReport", "FilterList", "element_info", "structure_report"]
