from pydantic import BaseModel, ConfigDict, Field

from citetrust_core.runtime_config import EngineRuntimeConfig


class CiteTrustConfig(BaseModel):
    """
    Configuration for the CiteTrust Core Engine.
    Decouples the engine from environment variables.

    Trust allow-lists are deliberately absent: they are compiled in
    (see `citetrust_core.constants`) and cannot be changed here.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    runtime: EngineRuntimeConfig = Field(
        default_factory=EngineRuntimeConfig.load_from_env,
        description="Env-derived feature and debug flags",
    )
