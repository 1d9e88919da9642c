"""Tests for migration object ordering."""

from erpbridge.migration.dependency_graph import (
    DEPENDENCIES,
    DependencyGraph,
    get_execution_order,
    get_execution_waves,
    get_transitive_dependencies,
)
from erpbridge.migration.objects import create_default_registry


class TestDependencyGraph:
    """Test ordering over the built-in dependency table."""

    def test_every_object_has_an_entry(self):
        registry = create_default_registry()

        assert set(DEPENDENCIES) == set(registry.list_ids())

    def test_built_in_table_is_valid_and_acyclic(self):
        registry = create_default_registry()
        result = DependencyGraph().validate(registry.list_ids())

        assert result["valid"]
        assert result["circularDependencies"] == []

    def test_transitive_dependencies_nearest_first(self):
        assert get_transitive_dependencies("CUSTOMER_OPEN_ITEM") == ["BUSINESS_PARTNER", "BANK_MASTER"]
        assert get_transitive_dependencies("ASSET_ACQUISITION") == ["FIXED_ASSET", "COST_CENTER", "PROFIT_CENTER"]
        assert get_transitive_dependencies("BANK_MASTER") == []

    def test_execution_order_puts_prerequisites_first(self):
        order = get_execution_order(["SALES_ORDER", "BUSINESS_PARTNER", "MATERIAL_MASTER", "PRICING_CONDITION"])

        assert order.index("BUSINESS_PARTNER") < order.index("SALES_ORDER")
        assert order.index("MATERIAL_MASTER") < order.index("PRICING_CONDITION")
        assert order.index("PRICING_CONDITION") < order.index("SALES_ORDER")

    def test_order_ignores_dependencies_outside_the_input(self):
        assert get_execution_order(["SALES_ORDER"]) == ["SALES_ORDER"]

    def test_waves(self):
        waves = get_execution_waves(["GL_BALANCE", "GL_ACCOUNT_MASTER", "BANK_MASTER", "BUSINESS_PARTNER"])

        assert waves == [["GL_ACCOUNT_MASTER", "BANK_MASTER"], ["GL_BALANCE", "BUSINESS_PARTNER"]]

    def test_waves_are_deterministic(self):
        ids = ["PURCHASE_ORDER", "MATERIAL_MASTER", "BUSINESS_PARTNER", "BANK_MASTER"]

        assert get_execution_waves(ids) == get_execution_waves(list(ids))

    def test_cycle_forces_final_wave(self):
        graph = DependencyGraph({"A": ["B"], "B": ["A"], "C": []})
        waves = graph.get_execution_waves(["A", "B", "C"])

        assert waves == [["C"], ["A", "B"]]
        assert graph.detect_circular_dependencies() == [["A", "B", "A"]]

    def test_validate_reports_missing(self):
        graph = DependencyGraph({"A": ["GHOST"]})
        result = graph.validate(["A"])

        assert not result["valid"]
        assert result["issues"] == [{"objectId": "A", "missingDependency": "GHOST"}]

    def test_set_dependencies(self):
        graph = DependencyGraph({})
        graph.set_dependencies("X", ["Y"])

        assert graph.get_dependencies("X") == ["Y"]
        assert graph.get_execution_order(["X", "Y"]) == ["Y", "X"]
