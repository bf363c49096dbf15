"""Configuration models for validation using Pydantic."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

# Columns the data provider may order the resource snapshot by
ORDERABLE_FIELDS = ("source_name", "category", "field")


class CredentialsConfig(BaseModel):
    """Supabase credentials loaded from environment variables."""
    
    supabase_url: str = Field(..., min_length=1, description="Supabase project URL")
    supabase_key: str = Field(..., min_length=1, description="Supabase API key")
    database_url: Optional[str] = Field(None, description="PostgreSQL database URL (optional, for schema setup)")
    
    @field_validator("supabase_url")
    @classmethod
    def validate_supabase_url(cls, v: str) -> str:
        """Validate Supabase URL format."""
        if not v or v == "https://your-project.supabase.co":
            raise ValueError("Supabase URL must be set in .env file")
        if not v.startswith("https://"):
            raise ValueError("Supabase URL must start with https://")
        return v
    
    @field_validator("supabase_key")
    @classmethod
    def validate_supabase_key(cls, v: str) -> str:
        """Validate Supabase key is set."""
        if not v or v == "your_supabase_anon_key_here":
            raise ValueError("Supabase key must be set in .env file")
        return v


class Config(BaseModel):
    """Application configuration."""
    
    credentials: CredentialsConfig
    log_level: str = Field(default="INFO", description="Logging level")
    resource_table: str = Field(default="resource", min_length=1, description="Supabase table holding Aral resources")
    order_by: str = Field(default="source_name", description="Column the resource snapshot is ordered by")
    
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper
    
    @field_validator("order_by")
    @classmethod
    def validate_order_by(cls, v: str) -> str:
        if v not in ORDERABLE_FIELDS:
            raise ValueError(f"order_by must be one of: {', '.join(ORDERABLE_FIELDS)}")
        return v
