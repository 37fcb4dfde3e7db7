"""
Response models for the Masa API.
"""

from typing import Dict, Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field


ScrapeFormat = Literal["text", "html", "markdown"]


class MasaModel(BaseModel):
    """Base model: keeps unknown fields and accepts numeric ids as strings."""

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class LiveTwitterSearchJob(MasaModel):
    """Handle returned when a live Twitter search is started."""
    uuid: str = Field(..., description="Job UUID for tracking")


class LiveTwitterSearchJobStatus(MasaModel):
    """Status of a live Twitter search job."""
    status: str = Field(..., description="Current status of the search job")


class Tweet(MasaModel):
    """A single tweet from a live Twitter search."""
    id: str
    text: str


class LiveTwitterSearchResultsPage(MasaModel):
    """Tweets returned for a live Twitter search job."""
    results: List[Tweet] = Field(default_factory=list)


class WebScrapeResult(MasaModel):
    """Result of a website scrape."""
    url: str
    title: str = ""
    content: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)


class SearchTermExtractionResult(MasaModel):
    """Search term extracted from free-form user input."""
    search_term: str = Field(..., alias="searchTerm")
    thinking: str = ""


class DataAnalysisResult(MasaModel):
    """Result of an AI analysis over tweets."""
    result: str


class SimilarTweet(MasaModel):
    """A tweet scored against the requested keywords."""
    id: str
    text: str
    similarity: float = Field(..., description="Similarity score (0-1, where 1 is exact match)")


class SimilaritySearchResult(MasaModel):
    """Results of a similarity search."""
    results: List[SimilarTweet] = Field(default_factory=list)
