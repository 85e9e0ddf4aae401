"""Model specification supplied by the caller for profile matching."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


def _number_to_str(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class GPUSpec(BaseModel):
    """An explicitly requested GPU."""

    model_config = {"frozen": True}

    product: str = Field(default="", description="GPU product name (e.g., 'H100')")
    ids: list[str] = Field(
        default_factory=list,
        description="PCI device ids (e.g., '2330')",
    )

    @field_validator("product", mode="before")
    @classmethod
    def _product_to_str(cls, value: Any) -> Any:
        return _number_to_str(value)

    @field_validator("ids", mode="before")
    @classmethod
    def _ids_to_str(cls, value: Any) -> Any:
        # Unquoted ids such as 2330 load as integers
        if value is None:
            return []
        if isinstance(value, list):
            return [_number_to_str(v) for v in value]
        return value


class ModelSpec(BaseModel):
    """Matching criteria for selecting manifest profiles.

    Field names accept both snake_case and the custom resource's camelCase
    keys, so ``spec.source.ngc.model`` can be validated directly. Unrelated
    resource fields are ignored.
    """

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    precision: str = Field(default="", description="Model precision (e.g., 'fp16')")
    tensor_parallelism: str = Field(
        default="",
        alias="tensorParallelism",
        description="Tensor parallelism degree",
    )
    qos_profile: str = Field(
        default="",
        alias="qosProfile",
        description="QoS profile, conventionally 'latency' or 'throughput'",
    )
    engine: str = Field(default="", description="Backend engine (e.g., 'tensorrt_llm')")
    lora: bool | None = Field(default=None, description="LoRA requested; None means not set")
    gpus: list[GPUSpec] = Field(default_factory=list, description="Explicit GPU list")

    @field_validator("precision", "tensor_parallelism", "qos_profile", "engine", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        return _number_to_str(value)

    @field_validator("gpus", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value
