"""
Insights response schemas.

GET /insights -> InsightsResponse
"""
from typing import Optional
from pydantic import BaseModel, Field


class PatternResponse(BaseModel):
    type: str = Field(description='"positive" | "challenging"')
    factor: str = Field(examples=["Good sleep quality"])
    impact: int = Field(
        description="Signed percentage. >= 0 for positive, <= 0 for challenging.",
        examples=[42],
    )
    description: str
    confidence: int = Field(ge=0, le=100, description="Sample-size based, 0-100.")
    trend: Optional[str] = Field(
        default=None,
        description='"improving" | "declining" | "stable"; only with 60+ entries.',
    )


class InsightResponse(BaseModel):
    icon: str
    title: str
    description: str
    priority: int = Field(ge=1, le=10, description="Higher shows first.")
    category: str = Field(description='"correlation" | "trend" | "achievement" | "warning"')


class InsightsResponse(BaseModel):
    entry_count: int
    last_updated: str = Field(examples=["Today", "3 days ago", "Never"])
    positive_patterns: list[PatternResponse]
    challenging_patterns: list[PatternResponse]
    insights: list[InsightResponse]
    data_quality: str = Field(description='"limited" (<30) | "good" (<100) | "excellent"')
