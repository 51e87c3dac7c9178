import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from employee_api.config.models import Settings

CONFIG_ENV_VAR = "EMPLOYEE_API_CONFIG"
BASE_URL_ENV_VAR = "EMPLOYEE_API_BASE_URL"
DEFAULT_CONFIG_PATH = Path("config.yaml")


def resolve_config_path(environ: dict[str, str] | None = None) -> tuple[Path, bool]:
    """
    Work out which config file to read.
    Returns (path, explicit) where explicit means the path came from the environment.
    """
    env = os.environ if environ is None else environ
    configured = env.get(CONFIG_ENV_VAR)
    if configured:
        return Path(configured), True
    return DEFAULT_CONFIG_PATH, False


def load_settings(path: Path, *, required: bool = True) -> Settings:
    """
    Load and validate a settings file.
    Raises FileNotFoundError if the file is missing and required.
    Raises ValueError if the YAML or the schema is invalid.
    """
    if not path.exists():
        if required:
            raise FileNotFoundError(f"Config file not found at: {path}")
        return Settings()

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in config file: {e}") from e

    # Empty file means all defaults
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(data).__name__}")

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Config validation failed:\n{e}") from e


def apply_env_overrides(settings: Settings, environ: dict[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    base_url = env.get(BASE_URL_ENV_VAR)
    if not base_url:
        return settings
    upstream = settings.upstream.model_copy(update={"base_url": base_url})
    return settings.model_copy(update={"upstream": upstream})


def load_from_environment(environ: dict[str, str] | None = None) -> Settings:
    """Resolve, load and override settings the way the running service does."""
    path, explicit = resolve_config_path(environ)
    settings = load_settings(path, required=explicit)
    return apply_env_overrides(settings, environ)
