"""Tests for static dependency graph analysis."""

import pytest

from myinject import CircularDependencyError, DependencyGraph, Inject, inject

from sample_app import Chicken, Egg, Engine, Renderer, Window, events


class Dashboard:
    engine: Engine = Inject()

    @inject
    def __init__(self, renderer: Renderer, window: Window):
        self.renderer = renderer
        self.window = window


class TestDependencyGraph:
    """Tests for DependencyGraph."""

    def test_dependencies_and_dependents(self):
        graph = DependencyGraph().add(Dashboard)

        assert graph.get_dependencies(Dashboard) == [Renderer, Window, Engine]
        assert graph.get_dependents(Window) == [Dashboard, Renderer, Engine]
        assert set(graph) == {Dashboard, Renderer, Window, Engine}
        assert len(graph) == 4
        assert Window in graph

    def test_initialization_order_puts_dependencies_first(self):
        order = DependencyGraph().add(Dashboard).get_initialization_order()

        assert order[0] is Window
        assert order[-1] is Dashboard
        assert order.index(Renderer) < order.index(Dashboard)
        assert order.index(Engine) < order.index(Dashboard)

    def test_analysis_does_not_construct(self):
        DependencyGraph().add(Engine).get_initialization_order()

        assert events == []

    def test_detects_cycles(self):
        graph = DependencyGraph().add(Chicken)

        assert graph.detect_circular_dependencies() == [[Chicken, Egg, Chicken]]

        with pytest.raises(CircularDependencyError) as exc_info:
            graph.get_initialization_order()

        assert exc_info.value.chain == [Chicken, Egg, Chicken]

    def test_bound_types_are_leaves(self, injector):
        injector.bind(Egg, object())

        graph = DependencyGraph(injector).add(Chicken)

        assert graph.get_dependencies(Egg) == []
        assert graph.detect_circular_dependencies() == []
        assert graph.get_initialization_order() == [Egg, Chicken]

    def test_multiple_roots(self):
        graph = DependencyGraph().add(Renderer, Engine)

        assert graph.types == [Renderer, Engine, Window]
