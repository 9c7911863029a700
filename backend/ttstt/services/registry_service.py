from typing import List, Optional

from ..config import logger
from ..errors import InvalidKind, ProviderNotConfigured
from ..models import Provider, ProviderConfig, ProviderInfo


def get_provider_config(state, provider: Provider) -> ProviderConfig:
    for config in state.providers:
        if config.provider == provider:
            return config
    raise ProviderNotConfigured(provider)


def default_provider(state, kind: str) -> Optional[Provider]:
    if kind == "tts":
        return state.default_tts_provider
    if kind == "stt":
        return state.default_stt_provider
    raise InvalidKind(kind)


def add_or_replace(state, config: ProviderConfig) -> None:
    """Register ``config``, replacing any entry for the same provider.

    A config flagged as default for a kind takes that default from every other
    entry, so at most one entry per kind carries the flag.
    """
    config = config.model_copy()
    state.providers = [p for p in state.providers if p.provider != config.provider]

    if config.is_default_tts:
        state.default_tts_provider = config.provider
        for p in state.providers:
            p.is_default_tts = False

    if config.is_default_stt:
        state.default_stt_provider = config.provider
        for p in state.providers:
            p.is_default_stt = False

    state.providers.append(config)
    logger.info(
        f"Provider {config.provider.value} configured (default_tts={config.is_default_tts}, default_stt={config.is_default_stt})"
    )


def remove(state, provider: Provider) -> None:
    state.providers = [p for p in state.providers if p.provider != provider]
    if state.default_tts_provider == provider:
        state.default_tts_provider = None
    if state.default_stt_provider == provider:
        state.default_stt_provider = None
    logger.info(f"Provider {provider.value} removed")


def set_default(state, provider: Provider, kind: str) -> None:
    if not any(p.provider == provider for p in state.providers):
        raise ProviderNotConfigured(provider)

    if kind == "tts":
        for p in state.providers:
            p.is_default_tts = p.provider == provider
        state.default_tts_provider = provider
    elif kind == "stt":
        for p in state.providers:
            p.is_default_stt = p.provider == provider
        state.default_stt_provider = provider
    else:
        raise InvalidKind(kind)
    logger.info(f"Default {kind.upper()} provider set to {provider.value}")


def list_providers(state) -> List[ProviderInfo]:
    """Registered providers without their credentials."""
    return [
        ProviderInfo(
            provider=p.provider,
            is_default_tts=p.is_default_tts,
            is_default_stt=p.is_default_stt,
            default_voice=p.default_voice,
            default_speed=p.default_speed,
        )
        for p in state.providers
    ]
