import importlib.resources as pkg_resources
from pathlib import Path
from typing import Any, Protocol, cast

from dynaconf import Dynaconf, Validator
from dynaconf.validator import ValidatorList

# Internal data paths
DATA_FOLDER = Path(str(pkg_resources.files("top_podcasts").joinpath("data")))
CONFIG_FILE = DATA_FOLDER / "config.toml"


class ConfigProto(Protocol):
    """Protocol for config object."""

    # Built-ins
    validators: ValidatorList

    def load_file(  # noqa: D102
        self,
        path: str | Path | None = None,
        env: str | None = None,
        silent: bool = True,  # noqa: FBT001, FBT002
        key: str | None = None,
        validate: Any = None,
    ) -> None: ...

    # Config variables
    local_mode: bool
    log_level: str

    # Top podcasts API
    base_url: str
    http_timeout: int
    user_agent: str
    max_workers: int

    # Sentry (only in deployed)
    sentry_dsn: str


_sentry_validator = Validator(
    "sentry_dsn",
    required=True,
    ne="",
    messages={"operations": "{name} must not be blank when in production"},
    when=Validator("local_mode", eq=False),
)

config = Dynaconf(
    envvar_prefix="TP",
    settings_files=[CONFIG_FILE],
    load_dotenv=True,
    ignore_unknown_envvars=True,
    validators=[
        Validator("log_level", cast=lambda x: x.upper()),
        Validator("local_mode", cast=bool),
        Validator("http_timeout", "max_workers", cast=int),
    ],
)

config = cast(ConfigProto, config)

config.validators.register(
    _sentry_validator,
    Validator("base_url", required=True, ne="", messages={"operations": "{name} must not be blank"}),
    Validator("max_workers", gt=0),
)
