"""Process-wide configuration, overridable per context.

The configuration is loaded once from the file named by ``CONFIG_FILE``.
``with_context`` swaps in a modified copy for the current context only, which
is how tests and tools build an app with different settings.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from src.inventory.runtime.config.config_data import ConfigData
from src.inventory.runtime.config.config_template import load_config
from src.inventory.runtime.config.settings import EnvironmentVariables

# Derived from the other database fields on validation
_COMPUTED_FIELDS = {"database": {"password", "connection_string"}}


@dataclass(frozen=True)
class AppContext:
    config: ConfigData


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context",
    default=AppContext(config=load_config(Path(EnvironmentVariables().config_file))),
)


def get_context() -> AppContext:
    return _app_context.get()


def get_config() -> ConfigData:
    """Return the configuration of the current context."""
    return get_context().config


def override_config(config: ConfigData, **sections: dict[str, Any]) -> ConfigData:
    """Return ``config`` with the given section fields replaced.

    Each keyword names a top-level section (``app``, ``database``,
    ``logging``) and maps field names to new values. Fields not named keep
    their current values. The result is validated like a loaded file.
    """
    unknown = set(sections) - set(ConfigData.model_fields)
    if unknown:
        raise ValueError(f"Unknown configuration section(s): {', '.join(sorted(unknown))}")

    data = config.model_dump(exclude=_COMPUTED_FIELDS)
    for name, values in sections.items():
        data[name] = {**data[name], **values}
    return ConfigData.model_validate(data)


@contextmanager
def with_context(**sections: dict[str, Any]):
    """Temporarily override configuration sections for the current context.

    Example:
        with with_context(app={"request_timeout_seconds": 0.5}):
            app = create_app()
    """
    current = get_context()
    token = _app_context.set(
        replace(current, config=override_config(current.config, **sections))
    )
    try:
        yield get_config()
    finally:
        _app_context.reset(token)
