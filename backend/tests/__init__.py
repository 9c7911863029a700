"""
Test suite for the TTSTT service

This package contains unit tests for the core components:
- test_auth.py: API key validation and roles
- test_registry.py: Provider registry and default exclusivity
- test_keys.py: API key management and the initial admin key
- test_dispatcher.py: Provider resolution, parameter defaults, vendor adapters
- test_pair_store.py: Audio-text pair persistence and pagination
- test_speech_service.py: TTS/STT request flow and history recording
- test_db.py: SQLite persistence of registry state
- test_api.py: HTTP scenarios through FastAPI's TestClient
"""
