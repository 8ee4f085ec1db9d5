import os
from typing import Any, Literal

import yaml
from pydantic.dataclasses import Field, dataclass


@dataclass
class FriendlyLogConfig:
    mode: Literal["friendly"]
    format: str | None = None


@dataclass
class JsonLogConfig:
    mode: Literal["json"]
    fields: dict[str, str] | None = None


@dataclass
class Configs:
    application_queue: dict[str, Any]

    time_zone: str

    logging: FriendlyLogConfig | JsonLogConfig = Field(discriminator="mode")


with open(os.environ.get("CONFIGS_FILE", "configs.yaml"), "r") as file:
    loaded_configs = yaml.load(file.read(), Loader=yaml.FullLoader)

configs = Configs(**loaded_configs)
