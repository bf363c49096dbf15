"""
FastAPI application for the OpenVerse site.

The Supabase client is created here, once per application, and stored on
app.state; routes get it through the get_supabase dependency.
"""

from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from models.config_models import Config
from storage.supabase_client import SupabaseClient
from utils.config_loader import load_config
from utils.logger import setup_logger

logger = setup_logger(name=__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def create_app(supabase: Optional[SupabaseClient] = None, config: Optional[Config] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        supabase: Client to read resources with (created from config if not provided)
        config: Application config (loaded from .env if not provided)

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = load_config()
        setup_logger(log_level=config.log_level)
    if supabase is None:
        supabase = SupabaseClient(
            config.credentials.supabase_url,
            config.credentials.supabase_key,
            table_name=config.resource_table,
        )

    app = FastAPI(
        title="OpenVerse",
        description="Open-Source Version of Paraverse",
        version="1.0.0",
    )
    app.state.supabase = supabase
    app.state.config = config

    from backend.routes import api_router, pages_router
    app.include_router(pages_router)
    app.include_router(api_router)

    logger.info("FastAPI app initialized")
    return app
