"""Access to shared CLI state stored on the Typer context."""

from typing import TYPE_CHECKING

import typer

from ergobox.bindings.codec import BindingCodec, create_binding_codec
from ergobox.config.key_registry import load_key_registry
from ergobox.config.models import UserConfigData
from ergobox.config.user_config import UserConfig, create_user_config


if TYPE_CHECKING:
    from ergobox.cli.app import AppContext


def get_app_context(ctx: typer.Context) -> "AppContext | None":
    from ergobox.cli.app import AppContext

    obj = ctx.find_object(AppContext)
    return obj if isinstance(obj, AppContext) else None


def get_user_config_from_context(ctx: typer.Context) -> UserConfig:
    """User config of the current invocation, loading defaults when absent."""
    app_context = get_app_context(ctx)
    if app_context is not None:
        return app_context.user_config
    return create_user_config()


def get_settings(ctx: typer.Context) -> UserConfigData:
    return get_user_config_from_context(ctx).config


def get_codec_from_context(ctx: typer.Context) -> BindingCodec:
    """Binding codec over the configured (or bundled) key registry."""
    settings = get_settings(ctx)
    return create_binding_codec(load_key_registry(settings.key_registry_path))
