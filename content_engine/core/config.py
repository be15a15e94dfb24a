"""Configuration management for the Content Engine."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # Environment variables should be set directly in that case
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Supabase configuration (required)
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(..., description="Supabase service role key")

    # OpenAI configuration (required)
    OPENAI_API_KEY: str = Field(..., description="OpenAI API key")

    # Environment
    CONTENT_ENGINE_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")

    # Embedding configuration
    EMBEDDING_MODEL: str = Field(
        default="text-embedding-3-small", description="OpenAI embedding model"
    )
    EMBEDDING_DIM: int = Field(default=1536, description="Embedding vector dimension")

    # Store layout
    ASSETS_TABLE: str = Field(default="assets", description="Table holding asset records")
    PINNING_RULES_TABLE: str = Field(
        default="pinning_rules", description="Table holding keyword pinning rules"
    )
    SEARCH_RPC_V2: str = Field(
        default="search_assets_v2",
        description="Vector search function accepting filter_capability",
    )
    SEARCH_RPC_V1: str = Field(
        default="search_assets", description="Legacy vector search function"
    )

    # Search behaviour
    SEARCH_DEFAULT_LIMIT: int = Field(default=10, description="Default number of results", ge=1)
    SEARCH_MIN_SIMILARITY: float = Field(
        default=0.2, description="Similarity floor applied by the store before reranking"
    )
    SEARCH_OVERFETCH_FACTOR: int = Field(
        default=2, description="Candidates fetched per requested result", ge=1
    )
    CAPABILITY_FILTER_ENABLED: bool = Field(
        default=True, description="Pass the resolved capability to the store as a filter"
    )
    CAPABILITY_BOOST_ENABLED: bool = Field(
        default=True, description="Boost results whose primary capability matches"
    )

    # Rerank boosts
    CASE_STUDY_BOOST: float = Field(default=0.10, description="Boost for case studies")
    QUALITY_BOOST: float = Field(default=0.05, description="Boost for high quality assets")
    QUALITY_BOOST_MIN_SCORE: int = Field(
        default=4, description="Minimum quality score (1-5) that earns the quality boost"
    )
    CAPABILITY_BOOST: float = Field(
        default=0.15, description="Boost when the primary capability matches the query"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    return Settings()
