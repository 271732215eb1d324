from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from reservoir.core.attributes import AttributeSpec, CoverageRecord


class AttributeInfo(BaseModel):
    """Read-only snapshot of one attribute's definition and coverage."""

    name: str
    type: str
    aliases: Tuple[str, ...] = ()
    squash: Optional[Tuple[str, ...]] = None
    default: Any = None
    identity: bool = False
    coverage_file: Optional[str] = None
    coverage_line: Optional[int] = None
    coverage_hits: int = 0

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @classmethod
    def build(cls, spec: AttributeSpec, record: Optional[CoverageRecord]) -> "AttributeInfo":
        return cls(
            name=spec.name,
            type=spec.type,
            aliases=spec.aliases,
            squash=spec.squash,
            default=spec.default,
            identity=spec.identity,
            coverage_file=record.file if record else spec.definition_file,
            coverage_line=record.line if record else spec.definition_line,
            coverage_hits=record.hits if record else 0,
        )
