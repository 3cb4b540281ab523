"""Shared fixtures for the pricing client tests."""

from __future__ import annotations

import copy
import threading
from typing import Any, Callable, Dict, Generator, List, Optional

import pytest

from ai_pricing.cache import PricingCache
from ai_pricing.decoding import decode_pricing_document
from ai_pricing.models import PricingDocument

SAMPLE_PAYLOAD: Dict[str, Any] = {
    "meteredPriceId": "price_1QmeteredAbc",
    "providers": [
        {
            "description": "GPT and DALL-E models",
            "key": "openai",
            "label": "OpenAI",
            "markup": {"imagePercentage": 0.2, "textPercentage": 0.15},
            "moderationThreshold": {
                "categories": {
                    "hate": True,
                    "hate/threatening": True,
                    "self-harm": False,
                    "self-harm/instructions": True,
                    "self-harm/intent": True,
                    "sexual/minors": True,
                },
                "categoryScore": {
                    "harassment/threatening": 0.8,
                    "illicit": 0.9,
                    "illicit/violent": 0.7,
                    "violence/graphic": 0.85,
                },
                "general": 0.5,
            },
            "models": [
                {
                    "added": "2024-05-13",
                    "created": "2024-05-13",
                    "features": ["vision", "tools"],
                    "key": "gpt-4o",
                    "modelId": "gpt-4o-2024-08-06",
                    "pricing": {
                        "cachedInputPer1K": 0.00125,
                        "cachedInputPer1M": 1.25,
                        "inputPer1K": 0.0025,
                        "inputPer1M": 2.5,
                        "outputPer1K": 0.01,
                        "outputPer1M": 10,
                    },
                    "streaming": True,
                    "type": "text",
                    "encoder": "o200k_base",
                    "prodPriceIds": {"cachedInput": "price_ci", "input": "price_in", "output": "price_out"},
                },
                {
                    "added": "2023-11-06",
                    "created": "2023-11-06",
                    "key": "dall-e-3",
                    "pricing": [
                        {"costPerImage": 0.04, "description": "Standard", "size": "1024x1024"},
                        {"costPerImage": 0.08, "description": "Standard wide", "size": "1792x1024"},
                        {"costPerImage": 0.12, "description": "HD wide", "size": "1792x1024"},
                    ],
                    "type": "image",
                    "deprecated": False,
                },
            ],
            "providerHost": "api.openai.com",
            "website": "https://openai.com",
        },
        {
            "description": "Claude models on Bedrock",
            "key": "bedrock",
            "label": "AWS Bedrock",
            "markup": {"imagePercentage": 0, "textPercentage": 0.1},
            "moderationThreshold": {
                "categories": {
                    "hate": True,
                    "hate/threatening": True,
                    "self-harm": True,
                    "self-harm/instructions": True,
                    "self-harm/intent": True,
                    "sexual/minors": True,
                },
                "categoryScore": {
                    "harassment/threatening": 0.5,
                    "illicit": 0.5,
                    "illicit/violent": 0.5,
                    "violence/graphic": 0.5,
                },
                "general": 0.4,
            },
            "models": [
                {
                    "added": "2024-10-22",
                    "created": "2024-10-22",
                    "features": [],
                    "key": "claude-sonnet",
                    "inferenceProfileArn": "arn:aws:bedrock:us-east-1:123456789012:inference-profile/us.sonnet",
                    "inferenceProfileId": "us.sonnet",
                    "pricing": {
                        "inputPer1K": 0.003,
                        "inputPer1M": 3.0,
                        "outputPer1K": 0.015,
                        "outputPer1M": 15.0,
                    },
                    "systemDisabled": True,
                    "type": "text",
                },
            ],
            "providerHost": "bedrock-runtime.us-east-1.amazonaws.com",
            "website": "https://aws.amazon.com/bedrock",
        },
    ],
}


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    """Return a deep copy of the sample wire document."""
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def sample_document(sample_payload: Dict[str, Any]) -> PricingDocument:
    """Return the sample document decoded."""
    return decode_pricing_document(sample_payload)


class FakeFetcher:
    """Stand-in for PricingFetcher that counts calls and records URLs.

    Each call decodes a fresh document from the payload, or raises the next
    queued error.
    """

    def __init__(self, payload: Dict[str, Any], delay: Optional[threading.Event] = None) -> None:
        self.payload = payload
        self.urls: List[str] = []
        self.errors: List[Exception] = []
        self.delay = delay
        self._lock = threading.Lock()

    @property
    def calls(self) -> int:
        return len(self.urls)

    def fetch(self, url: str) -> PricingDocument:
        with self._lock:
            self.urls.append(url)
            error = self.errors.pop(0) if self.errors else None
        if self.delay is not None:
            self.delay.wait(timeout=5)
        if error is not None:
            raise error
        return decode_pricing_document(copy.deepcopy(self.payload))


@pytest.fixture
def fake_fetcher_factory(sample_payload: Dict[str, Any]) -> Callable[..., FakeFetcher]:
    """Return a factory building FakeFetcher instances over the sample payload."""

    def _factory(delay: Optional[threading.Event] = None) -> FakeFetcher:
        return FakeFetcher(sample_payload, delay=delay)

    return _factory


@pytest.fixture(autouse=True)
def _reset_default_cache() -> Generator[None, None, None]:
    """Give every test a fresh process-wide cache."""
    PricingCache.cleanup()
    yield
    PricingCache.cleanup()
