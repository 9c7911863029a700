"""
TTSTT - Text-to-Speech & Speech-to-Text API server

Bootstraps the FastAPI application:
- Configuration and environment setup
- Registry/key state loaded from SQLite (initial admin key created on first run)
- CORS middleware
- Router inclusion
- Uvicorn server startup

The business logic is organized into:
- ttstt/config.py: Environment variables and configuration
- ttstt/db.py: SQLite persistence of providers, API keys and defaults
- ttstt/state.py: The owned registry/key state and its mutation lock
- ttstt/models.py: Pydantic models
- ttstt/vendors/: Provider adapters (OpenAI)
- ttstt/services/: Authorization, registry, key management, dispatch, pair storage
- ttstt/routers/: API route handlers
"""
from ttstt.application import create_app
from ttstt.config import ensure_directories

# Ensure required directories exist
ensure_directories()

app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("server:app", host="0.0.0.0", port=8001, reload=True)
