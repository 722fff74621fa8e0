"""
Value network weights - Schema and loader for the fixed parameter artifact.

The artifact is JSON keyed by layer name, each layer holding a weight
matrix of shape (out, in) and a bias vector of length out:

    {"fc1": {"weight": [[...], ...], "bias": [...]},
     "fc2": {...}, "fc3": {...}, "output": {...}}

The flat export form ({"fc1.weight": ..., "fc1.bias": ...}) is accepted
too. Weights are validated once, converted to float32 arrays and
frozen; nothing in this package ever writes them.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any
import json
import logging

import numpy as np
from pydantic import BaseModel, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)


INPUT_SIZE = 56
LAYER_NAMES = ("fc1", "fc2", "fc3", "output")
LAYER_SIZES = {"fc1": 128, "fc2": 64, "fc3": 32, "output": 1}


class WeightsError(ValueError):
    """The weight artifact is missing, malformed or has the wrong shape."""


class LayerParams(BaseModel):
    """One dense layer: weight is (out, in), bias is (out,)."""
    weight: list[list[float]] = Field(min_length=1)
    bias: list[float] = Field(min_length=1)

    @model_validator(mode="after")
    def check_shape(self) -> LayerParams:
        if len(self.weight) != len(self.bias):
            raise ValueError(
                f"weight has {len(self.weight)} rows but bias has {len(self.bias)} entries"
            )
        widths = {len(row) for row in self.weight}
        if len(widths) != 1:
            raise ValueError("weight rows have different lengths")
        return self

    @property
    def in_features(self) -> int:
        return len(self.weight[0])

    @property
    def out_features(self) -> int:
        return len(self.bias)


class ValueNetParams(BaseModel):
    """The full 56 -> 128 -> 64 -> 32 -> 1 parameter set."""
    fc1: LayerParams
    fc2: LayerParams
    fc3: LayerParams
    output: LayerParams

    @model_validator(mode="before")
    @classmethod
    def unflatten(cls, data: Any) -> Any:
        """Accept {"fc1.weight": ..., "fc1.bias": ...} exports."""
        if not isinstance(data, dict) or not any("." in str(k) for k in data):
            return data
        nested: dict[str, dict[str, Any]] = {}
        for key, value in data.items():
            layer, _, param = str(key).partition(".")
            nested.setdefault(layer, {})[param] = value
        return nested

    @model_validator(mode="after")
    def check_chain(self) -> ValueNetParams:
        expected_in = INPUT_SIZE
        for name in LAYER_NAMES:
            layer: LayerParams = getattr(self, name)
            if layer.in_features != expected_in or layer.out_features != LAYER_SIZES[name]:
                raise ValueError(
                    f"{name} must be {LAYER_SIZES[name]}x{expected_in}, "
                    f"got {layer.out_features}x{layer.in_features}"
                )
            expected_in = layer.out_features
        return self


@dataclass(frozen=True)
class ValueNetWeights:
    """Validated, read-only float32 buffers, one (weight, bias) pair per layer."""
    layers: tuple[tuple[np.ndarray, np.ndarray], ...]

    @classmethod
    def from_params(cls, params: ValueNetParams) -> ValueNetWeights:
        layers = []
        for name in LAYER_NAMES:
            layer: LayerParams = getattr(params, name)
            weight = np.asarray(layer.weight, dtype=np.float32)
            bias = np.asarray(layer.bias, dtype=np.float32)
            weight.setflags(write=False)
            bias.setflags(write=False)
            layers.append((weight, bias))
        return cls(layers=tuple(layers))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValueNetWeights:
        try:
            params = ValueNetParams.model_validate(data)
        except ValidationError as e:
            raise WeightsError(f"Invalid value network weights: {e}") from e
        return cls.from_params(params)


def load_weights(path: str | Path) -> ValueNetWeights:
    """
    Load and validate the weight artifact at path.

    Raises WeightsError if the file is missing, not JSON, or does not
    match the network shape.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise WeightsError(f"Weights file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise WeightsError(f"Weights file is not valid JSON: {path}") from e

    weights = ValueNetWeights.from_dict(data)
    logger.info("Loaded value network weights from %s", path)
    return weights
