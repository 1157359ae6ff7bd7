"""Tests for the metadata resolver.

Covers: V2/V3 association-based navigation, V4 typed navigation, keys and
properties, multiplicities, referential constraints, and malformed input.
"""
from __future__ import annotations

import pytest

from odata_graph.metadata.parser import resolve_metadata


def entity(schema, name):
    return next(e for e in schema.entities if e.name == name)


def nav(schema, entity_name, nav_name):
    return next(n for n in entity(schema, entity_name).navigation_properties if n.name == nav_name)


# ============================================================================
# V2/V3 documents
# ============================================================================


class TestV2Navigation:
    def test_parses_all_entity_types_in_order(self, v2_metadata):
        schema = resolve_metadata(v2_metadata)
        assert [e.name for e in schema.entities] == ["Customer", "Order", "Shipper", "Employee"]
        assert schema.namespace == "NS"
        assert schema.version == "V2"

    def test_resolves_target_through_qualified_association_name(self, v2_metadata):
        schema = resolve_metadata(v2_metadata)
        orders = nav(schema, "Customer", "Orders")
        assert orders.target_type_name == "Order"
        assert orders.relationship_ref == "NS.Customer_Orders"
        assert orders.to_role == "Orders"

    def test_falls_back_to_bare_association_name(self, v2_metadata):
        schema = resolve_metadata(v2_metadata)
        assert nav(schema, "Order", "Shipper").target_type_name == "Shipper"

    def test_unknown_association_leaves_target_unresolved(self, v2_metadata):
        schema = resolve_metadata(v2_metadata)
        ghost = nav(schema, "Order", "Ghost")
        assert ghost.target_type_name is None
        assert ghost.relationship_ref == "NS.Missing"

    def test_reads_multiplicities_from_both_ends(self, v2_metadata):
        schema = resolve_metadata(v2_metadata)
        orders = nav(schema, "Customer", "Orders")
        assert orders.source_multiplicity == "0..1"
        assert orders.target_multiplicity == "*"
        customer = nav(schema, "Order", "Customer")
        assert customer.source_multiplicity == "*"
        assert customer.target_multiplicity == "0..1"

    def test_orients_constraints_from_navigation_source(self, v2_metadata):
        schema = resolve_metadata(v2_metadata)
        assert nav(schema, "Customer", "Orders").field_constraints == [("CustomerID", "CustomerID")]
        assert nav(schema, "Employee", "Manager").field_constraints == [("ReportsTo", "EmployeeID")]

    def test_resolves_self_referencing_association(self, v2_metadata):
        schema = resolve_metadata(v2_metadata)
        assert nav(schema, "Employee", "Manager").target_type_name == "Employee"

    def test_blank_type_falls_back_to_association(self, v2_metadata):
        blanked = v2_metadata.replace(
            '<NavigationProperty Name="Orders" Relationship=',
            '<NavigationProperty Name="Orders" Type="  " Relationship=',
        )
        schema = resolve_metadata(blanked)
        orders = nav(schema, "Customer", "Orders")
        assert orders.target_type_name == "Order"
        assert orders.relationship_ref == "NS.Customer_Orders"
        assert orders.target_multiplicity == "*"

    def test_minimal_association_document(self):
        schema = resolve_metadata(
            '<Schema Namespace="NS">'
            '<EntityType Name="Customer"><Key><PropertyRef Name="ID"/></Key>'
            '<Property Name="ID" Type="Edm.Int32"/>'
            '<NavigationProperty Name="Orders" Relationship="NS.Customer_Orders" '
            'FromRole="Customer" ToRole="Orders"/></EntityType>'
            '<Association Name="Customer_Orders">'
            '<End Role="Customer" Type="NS.Customer" Multiplicity="1"/>'
            '<End Role="Orders" Type="NS.Order" Multiplicity="*"/>'
            "</Association></Schema>"
        )
        assert schema.entities[0].navigation_properties[0].target_type_name == "Order"


# ============================================================================
# V4 documents
# ============================================================================


class TestV4Navigation:
    def test_strips_namespace_and_collection_wrapper(self, v4_metadata):
        schema = resolve_metadata(v4_metadata)
        orders = nav(schema, "Customer", "Orders")
        assert orders.target_type_name == "Order"
        assert orders.target_multiplicity == "*"
        assert orders.relationship_ref is None

    def test_single_valued_navigation_multiplicity(self, v4_metadata):
        schema = resolve_metadata(v4_metadata)
        customer = nav(schema, "Order", "Customer")
        assert customer.target_type_name == "Customer"
        assert customer.target_multiplicity == "1"

    def test_nullable_navigation_is_zero_or_one(self):
        schema = resolve_metadata(
            '<Schema Namespace="NS"><EntityType Name="A">'
            '<NavigationProperty Name="B" Type="NS.B"/></EntityType></Schema>'
        )
        assert schema.entities[0].navigation_properties[0].target_multiplicity == "0..1"

    def test_source_multiplicity_comes_from_partner(self, v4_metadata):
        schema = resolve_metadata(v4_metadata)
        assert nav(schema, "Customer", "Orders").source_multiplicity == "1"
        assert nav(schema, "Order", "Customer").source_multiplicity == "*"

    def test_reads_referential_constraints(self, v4_metadata):
        schema = resolve_metadata(v4_metadata)
        assert nav(schema, "Order", "Customer").field_constraints == [("CustomerID", "ID")]

    def test_uses_schema_that_declares_entity_types(self, v4_metadata):
        schema = resolve_metadata(v4_metadata)
        assert schema.namespace == "NS"
        assert schema.version == "V4"
        assert len(schema.entities) == 3

    def test_typed_navigation_wins_over_relationship(self):
        schema = resolve_metadata(
            '<Schema Namespace="NS"><EntityType Name="A">'
            '<NavigationProperty Name="B" Type="NS.B" Relationship="NS.Nope" ToRole="X"/>'
            "</EntityType></Schema>"
        )
        assert schema.entities[0].navigation_properties[0].target_type_name == "B"


# ============================================================================
# Keys and properties
# ============================================================================


class TestKeysAndProperties:
    def test_preserves_property_order(self, v2_metadata):
        schema = resolve_metadata(v2_metadata)
        assert [p.name for p in entity(schema, "Order").properties] == ["OrderID", "CustomerID"]
        assert entity(schema, "Order").properties[0].type == "Edm.Int32"

    def test_reads_ordered_composite_keys(self):
        schema = resolve_metadata(
            '<Schema Namespace="NS"><EntityType Name="Line">'
            '<Key><PropertyRef Name="OrderID"/><PropertyRef Name="ProductID"/></Key>'
            '<Property Name="ProductID" Type="Edm.Int32"/>'
            '<Property Name="OrderID" Type="Edm.Int32"/>'
            "</EntityType></Schema>"
        )
        assert schema.entities[0].keys == ["OrderID", "ProductID"]

    def test_drops_keys_that_name_no_property(self):
        schema = resolve_metadata(
            '<Schema Namespace="NS"><EntityType Name="A">'
            '<Key><PropertyRef Name="Missing"/><PropertyRef Name="ID"/></Key>'
            '<Property Name="ID" Type="Edm.Int32"/></EntityType></Schema>'
        )
        assert schema.entities[0].keys == ["ID"]

    def test_keeps_first_of_duplicated_properties(self):
        schema = resolve_metadata(
            '<Schema Namespace="NS"><EntityType Name="A">'
            '<Property Name="X" Type="Edm.Int32"/><Property Name="X" Type="Edm.String"/>'
            "</EntityType></Schema>"
        )
        props = schema.entities[0].properties
        assert len(props) == 1
        assert props[0].type == "Edm.Int32"

    def test_keeps_first_of_duplicated_entity_types(self):
        schema = resolve_metadata(
            '<Schema Namespace="NS">'
            '<EntityType Name="A"><Property Name="First" Type="Edm.Int32"/></EntityType>'
            '<EntityType Name="A"><Property Name="Second" Type="Edm.Int32"/></EntityType>'
            "</Schema>"
        )
        assert len(schema.entities) == 1
        assert schema.entities[0].properties[0].name == "First"


# ============================================================================
# Malformed input
# ============================================================================


class TestMalformedInput:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "not xml at all",
            "<html><body>Service Unavailable</body></html>",
            "<Schema><EntityType Name='A'>",
            '{"error": "nope"}',
        ],
    )
    def test_degrades_to_empty_schema(self, text):
        schema = resolve_metadata(text)
        assert schema.entities == []

    def test_accepts_bytes(self, v4_metadata):
        schema = resolve_metadata(v4_metadata.encode("utf-8"))
        assert len(schema.entities) == 3
