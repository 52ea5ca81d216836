"""Renderer settings commands for the dependency-diagram CLI."""

from cyclopts import App

from dependency_diagram.config import SETTINGS, get_config, validate_setting

config_app = App(name="config", help="Manage renderer settings")


def _scope(global_: bool) -> str:
    return "global" if global_ else "local"


@config_app.command
def set(key: str, value: str, global_: bool = False) -> None:
    """Store a renderer setting after checking it.

    Args:
        key: One of renderer.base_url, renderer.style, renderer.timeout
        value: New value; styles must be plain or scruffy, timeouts a number of seconds
        global_: Store in the global config instead of the local one
    """
    value = validate_setting(key, value)
    get_config(use_global=global_).set(key, value)
    print(f"Set {key} = {value} ({_scope(global_)})")


@config_app.command
def unset(key: str, global_: bool = False) -> None:
    """Remove a setting so its default applies again."""
    get_config(use_global=global_).unset(key)
    default = SETTINGS.get(key)
    if default is None:
        print(f"Unset {key} ({_scope(global_)})")
    else:
        print(f"Unset {key} ({_scope(global_)}), default is {default}")


@config_app.command
def get(key: str, global_: bool = False) -> None:
    """Show the effective value of a setting."""
    value = get_config(use_global=global_).get(key)
    if value is not None:
        print(f"{key} = {value}")
    elif key in SETTINGS:
        print(f"{key} = {SETTINGS[key]} (default)")
    else:
        print(f"{key} is not set")


@config_app.command(name="list")
def list_config(global_: bool = False) -> None:
    """Show every renderer setting, marking the ones left at their default."""
    settings = get_config(use_global=global_).list()

    print(f"Renderer settings ({_scope(global_)}):\n")
    for key, default in SETTINGS.items():
        if key in settings:
            print(f"{key} = {settings[key]}")
        else:
            print(f"{key} = {default} (default)")

    for key in sorted(settings.keys() - SETTINGS.keys()):
        print(f"{key} = {settings[key]} (not recognised)")
