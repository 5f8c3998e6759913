from enum import Enum
from typing import List

from pydantic import BaseModel, Field, model_validator


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class ProtocolQuery(BaseModel):
    """A protocol identifier that passed validation."""

    value: str = Field(..., min_length=1)

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.value


class Finding(BaseModel):
    id: str = Field(..., min_length=1)
    title: str
    description: str
    severity: Severity


class Recommendation(BaseModel):
    id: str = Field(..., min_length=1)
    title: str
    description: str


class ProtocolMetrics(BaseModel):
    tvl: str = Field(..., description="Total value locked, already formatted")
    holders: int = Field(..., ge=0)
    transactions: int = Field(..., ge=0)
    age: str = Field(..., description="Protocol age, already formatted")


class RiskAssessment(BaseModel):
    score: int = Field(..., ge=0, le=100)
    level: RiskLevel
    findings: List[Finding] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
    metrics: ProtocolMetrics

    @model_validator(mode="after")
    def validate_unique_ids(self):
        """Finding and recommendation ids are unique within their own list."""
        for name, items in (
            ("findings", self.findings),
            ("recommendations", self.recommendations),
        ):
            seen = set()
            for item in items:
                if item.id in seen:
                    raise ValueError(f"Duplicate id '{item.id}' in {name}")
                seen.add(item.id)
        return self

