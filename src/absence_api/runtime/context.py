from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace

from dotenv.main import load_dotenv
from loguru import logger
from pydantic import BaseModel

from src.absence_api.runtime.config.config_data import ConfigData
from src.absence_api.runtime.config.config_template import load_templated_yaml
from src.absence_api.runtime.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_default_config() -> ConfigData:
    """Load ``config.yaml`` (or the file named by ``APP_CONFIG_FILE``).

    Variables from a local ``.env`` are exported first so that the YAML
    placeholders can see them. Falls back to the built-in defaults when the
    file does not exist.
    """
    load_dotenv()
    settings = EnvironmentVariables()
    if not settings.config_file.exists():
        logger.warning(
            "Configuration file {} not found; using built-in defaults",
            settings.config_file,
        )
        return ConfigData()
    return load_templated_yaml(settings.config_file)


# Global configuration instance
_default_config = load_default_config()
_default_context = AppContext(config=_default_config)


# Context variable for application context
_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context.

    Returns:
        AppContext: The current application context containing configuration.
    """
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _recursive_model_dump_exclude_unset(model: BaseModel) -> dict:
    """Dump only the fields that were explicitly set, at every nesting level.

    A nested model appears in the result when it was assigned itself or when
    any of its own fields were set, and then only with those fields.
    """
    result = {}
    explicitly_set_fields = model.model_fields_set

    for field_name in model.__class__.model_fields:
        field_value = getattr(model, field_name)

        if isinstance(field_value, BaseModel):
            nested_result = _recursive_model_dump_exclude_unset(field_value)
            if nested_result:
                result[field_name] = nested_result
            elif field_name in explicitly_set_fields:
                result[field_name] = field_value.model_dump()
        elif field_name in explicitly_set_fields:
            result[field_name] = field_value

    return result


def _recursive_dict_merge(base_dict: dict, override_dict: dict) -> dict:
    """Recursively merge two dictionaries from deepest levels up.

    Args:
        base_dict: The base dictionary to merge into
        override_dict: The override dictionary to merge from

    Returns:
        dict: The merged dictionary
    """
    result = base_dict.copy()

    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            result[key] = _recursive_dict_merge(result[key], value)
        else:
            # Override or new key
            result[key] = value

    return result


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Recursively merge two ConfigData instances.

    This function merges the override_config into the base_config, with
    values from override_config taking precedence. Nested configurations
    are merged recursively.

    Args:
        base_config: The base ConfigData instance.
        override_config: The override ConfigData instance.
    Returns:
        ConfigData: The merged ConfigData instance.
    """
    base_dict = base_config.model_dump()
    override_dict = _recursive_model_dump_exclude_unset(override_config)
    merged_dict = _recursive_dict_merge(base_dict, override_dict)
    return ConfigData.model_validate(merged_dict)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Context manager for temporarily overriding the application context.

    This function merges the override configuration with the current context,
    allowing for partial overrides that inherit non-overridden values from
    the parent context.

    Args:
        config_override: Optional ConfigData instance. Only the fields that were
            explicitly set on it (at any nesting level) replace current values.

    Example:
        override_config = ConfigData()
        override_config.absences.allow_delete = True  # Only this section changes
        with with_context(override_config):
            config = get_config()
            # config.absences.allow_delete is True, logging/database inherited
    """
    if config_override is None:
        # No overrides, just yield current context
        yield
        return

    current_config = get_context().config

    if isinstance(config_override, ConfigData):
        # Get only explicitly set fields recursively using our custom function
        merged_config = _merge_configs(current_config, config_override)
    else:
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Set the current application configuration.
    This replaces the entire current configuration with the provided one.
    Args:
        config: ConfigData instance to set as current.
    """
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration.

    Returns:
        ConfigData: The current configuration from the app context.
    """
    return get_context().config
