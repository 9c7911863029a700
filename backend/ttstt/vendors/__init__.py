from typing import Dict, Type

from .base import VendorAdapter
from .openai_adapter import OpenAIAdapter
from ..models import Provider, ProviderConfig


# One adapter class per Provider variant
VENDOR_ADAPTERS: Dict[Provider, Type[VendorAdapter]] = {
    Provider.OPENAI: OpenAIAdapter,
}


def build_adapter(config: ProviderConfig, adapters: Dict[Provider, Type[VendorAdapter]] = VENDOR_ADAPTERS) -> VendorAdapter:
    return adapters[config.provider](config.api_key)
