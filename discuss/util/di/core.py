"""Core DI providers (non-mockable)."""

from dishka import Scope, from_context, provide

from discuss.config import AuthSettings, Settings, ThreadSettings
from discuss.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Config provider - concrete, no mocks needed.

    ``Settings`` comes in as container context, so the app factory and every
    request see the same instance. Sections are derived from it.
    """

    settings = from_context(provides=Settings, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_thread_settings(self, settings: Settings) -> ThreadSettings:
        """Provide thread settings."""
        return settings.thread
