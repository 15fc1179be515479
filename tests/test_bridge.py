"""Tests for the dependency_injector bridge."""

from dependency_injector import containers, providers

from myinject import build_container
from myinject.core.di.bridge import provider_for

from sample_app import Engine, Renderer, Window


class HTTPClient:
    pass


class TestBuildContainer:
    """Tests for build_container."""

    def test_provider_names(self, injector):
        container = build_container(injector, Engine, Renderer, HTTPClient)

        assert isinstance(container, containers.DynamicContainer)
        assert set(container.providers) == {'engine', 'renderer', 'http_client'}

    def test_singleton_providers_share_injector_cache(self, injector):
        container = build_container(injector, Engine, Window)

        engine = container.engine()

        assert container.engine() is engine
        assert injector.get(Engine) is engine
        assert container.window() is engine.window

    def test_non_singleton_provider_creates_new_instances(self, injector):
        container = build_container(injector, Renderer)

        first = container.renderer()
        second = container.renderer()

        assert first is not second
        assert first.window is second.window

    def test_bound_type_uses_bound_instance(self, injector):
        double = HTTPClient()
        injector.bind(HTTPClient, double)

        container = build_container(injector, HTTPClient)

        assert container.http_client() is double

    def test_extends_existing_container(self, injector):
        existing = containers.DynamicContainer()
        existing.config = providers.Object({'debug': True})

        container = build_container(injector, Window, container=existing)

        assert container is existing
        assert container.config() == {'debug': True}
        assert isinstance(container.window(), Window)

    def test_provider_for(self, injector):
        provider = provider_for(injector, Window)

        assert isinstance(provider, providers.Callable)
        assert provider() is injector.get(Window)
