"""Pydantic models for tool inputs and structured tool outputs.

Input models are the single source of truth for argument validation: the
dispatcher validates raw client arguments against them before any handler
runs, and the JSON Schema advertised in ``tools/list`` is generated from the
same models. Defaults are applied here, never inside handlers.

Output models describe the ``structuredContent`` payload of tools that return
structured data.
"""

from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _whole_number(value: Any) -> Any:
    """Accept ints and integral floats; reject bools, strings and fractions."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("must be a whole number")
        return int(value)
    return value


WholeNumber = Annotated[int, BeforeValidator(_whole_number)]

EntityType = Literal["person", "organization", "location", "date", "technology"]
SentimentLabel = Literal["positive", "negative", "neutral", "mixed"]
TemperatureUnit = Literal["celsius", "fahrenheit"]
AnalysisDepth = Literal["quick", "standard", "deep"]
ElicitationAction = Literal["accept", "decline", "cancel"]

DEFAULT_ENTITY_TYPES: List[str] = ["person", "organization", "location"]


# =============================================================================
# Input Models
# =============================================================================


class ToolInput(BaseModel):
    """Base class for tool arguments: unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class SummarizeInput(ToolInput):
    text: str = Field(..., min_length=1, description="Text to summarize")
    max_length: WholeNumber = Field(
        default=100,
        gt=0,
        alias="maxLength",
        description="Maximum summary length in words",
    )


class SentimentInput(ToolInput):
    text: str = Field(..., min_length=1, description="Text to analyze sentiment of")


class EntityInput(ToolInput):
    text: str = Field(..., min_length=1, description="Text to extract entities from")
    types: List[EntityType] = Field(
        default=list(DEFAULT_ENTITY_TYPES),
        description="Entity types to extract",
    )


class SearchInput(ToolInput):
    query: str = Field(..., min_length=1, description="Search query")
    max_results: WholeNumber = Field(
        default=5,
        ge=1,
        le=20,
        alias="maxResults",
        description="Maximum number of results (1-20)",
    )


class WeatherInput(ToolInput):
    location: str = Field(..., min_length=1, description="City or location name")
    unit: TemperatureUnit = Field(default="fahrenheit", description="Temperature unit")


class SmartSummarizeInput(ToolInput):
    text: str = Field(
        ..., min_length=1, description="Text to summarize using the client's LLM"
    )
    max_length: WholeNumber = Field(
        default=150,
        gt=0,
        alias="maxLength",
        description="Approximate maximum summary length in words",
    )


class ConfigureAnalysisInput(ToolInput):
    text: str = Field(
        ...,
        min_length=1,
        description="Text to analyze; the user is asked for configuration options",
    )


# =============================================================================
# Output Models
# =============================================================================


class SentimentResult(BaseModel):
    """Heuristic sentiment classification."""

    sentiment: SentimentLabel
    confidence: float = Field(..., ge=0.0, le=1.0)
    explanation: str


class Entity(BaseModel):
    text: str
    type: EntityType
    confidence: float = Field(..., ge=0.0, le=1.0)


class EntityList(BaseModel):
    entities: List[Entity]


class SearchHit(BaseModel):
    title: str
    url: str
    snippet: str
    score: float


class SearchResults(BaseModel):
    results: List[SearchHit]


class WeatherReport(BaseModel):
    location: str
    temperature: float
    unit: TemperatureUnit
    condition: str
    humidity: float
    wind_speed: float
    forecast: str


class AnalysisConfig(BaseModel):
    """Analysis options collected from the user."""

    depth: AnalysisDepth = "standard"
    includeSentiment: bool = True
    includeEntities: bool = True
    maxSummaryWords: float = 100


class ConfigureAnalysisResult(BaseModel):
    """Outcome of the configuration dialog; ``config`` is set only on accept."""

    action: ElicitationAction
    config: Optional[AnalysisConfig] = None
    message: str
