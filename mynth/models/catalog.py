"""Catalogue of image generation models offered by the API.

Use ``AVAILABLE_MODELS`` to build model selectors or to validate a model
id before submitting a request.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ModelCapability(enum.Enum):
    """Model capabilities that affect the available generation options.

    Values:
        MAGIC_PROMPT:    Supports automatic prompt enhancement.
        NEGATIVE_PROMPT: Supports negative prompts to exclude elements.
        STEPS:           Supports a custom inference step count.
    """

    MAGIC_PROMPT = "magic_prompt"
    NEGATIVE_PROMPT = "negative_prompt"
    STEPS = "steps"


@dataclass(frozen=True, slots=True)
class AvailableModel:
    """An image generation model and what it supports.

    Attributes:
        id: Model identifier used in API requests.
        label: Human-readable display name.
        capabilities: Supported generation options.
    """

    id: str
    label: str
    capabilities: tuple[ModelCapability, ...] = ()

    def supports(self, capability: ModelCapability) -> bool:
        return capability in self.capabilities


_MAGIC = ModelCapability.MAGIC_PROMPT
_NEGATIVE = ModelCapability.NEGATIVE_PROMPT
_STEPS = ModelCapability.STEPS

AVAILABLE_MODELS: tuple[AvailableModel, ...] = (
    AvailableModel("auto", "Auto"),
    AvailableModel("black-forest-labs/flux.1-dev", "FLUX.1 Dev", (_MAGIC, _STEPS)),
    AvailableModel("black-forest-labs/flux-1-schnell", "FLUX.1 Schnell", (_MAGIC,)),
    AvailableModel("tongyi-mai/z-image-turbo", "Z Image Turbo", (_MAGIC, _STEPS)),
    AvailableModel("black-forest-labs/flux.2-dev", "FLUX.2 Dev", (_MAGIC, _STEPS)),
    AvailableModel("black-forest-labs/flux.2-klein-4b", "FLUX.2 Klein 4B"),
    AvailableModel(
        "john6666/bismuth-illustrious-mix",
        "Bismuth Illustrious Mix",
        (_MAGIC, _NEGATIVE, _STEPS),
    ),
    AvailableModel("google/gemini-3-pro-image-preview", "Nano Banana Pro"),
    AvailableModel("wan/wan2.6-image", "Wan 2.6 Image"),
    AvailableModel("xai/grok-imagine-image", "Grok Imagine Image"),
)


def get_model(model_id: str) -> AvailableModel | None:
    """Return the catalogue entry for *model_id*, or ``None`` if unknown."""
    for model in AVAILABLE_MODELS:
        if model.id == model_id:
            return model
    return None
