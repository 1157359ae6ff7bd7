from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..errors import MalformedMetadata
from ..types import EntityType, MetadataSchema, Multiplicity, NavigationProperty, Property
from .version import detect_odata_version

logger = logging.getLogger(__name__)

# ============================================================================
# Metadata resolver
#
# Normalizes OData CSDL documents into a MetadataSchema. Two navigation
# dialects are supported:
#
#   V4     <NavigationProperty Name="Orders" Type="Collection(NS.Order)"
#                              Partner="Customer"/>
#   V2/V3  <NavigationProperty Name="Orders" Relationship="NS.Customer_Orders"
#                              FromRole="Customers" ToRole="Orders"/>
#          <Association Name="Customer_Orders">
#            <End Role="Customers" Type="NS.Customer" Multiplicity="0..1"/>
#            <End Role="Orders" Type="NS.Order" Multiplicity="*"/>
#          </Association>
#
# Element names are matched by local name so the various EDMX/EDM namespace
# URIs all parse the same way.
# ============================================================================

_MULTIPLICITIES: set[str] = {"1", "0..1", "*"}
_COLLECTION_RE = re.compile(r"^Collection\((.+)\)$")


@dataclass(slots=True)
class _AssociationEnd:
    type_name: str
    multiplicity: Multiplicity | None


@dataclass(slots=True)
class _Constraint:
    principal_role: str
    principal_fields: list[str]
    dependent_role: str
    dependent_fields: list[str]


@dataclass(slots=True)
class _Association:
    ends: dict[str, _AssociationEnd] = field(default_factory=dict)
    constraint: _Constraint | None = None


def resolve_metadata(text: str | bytes) -> MetadataSchema:
    """Parse a metadata document into a normalized schema.

    Never raises: a document that is not XML, or has no Schema element,
    resolves to an empty schema.
    """
    try:
        return _resolve(text)
    except MalformedMetadata as err:
        logger.warning("Malformed metadata document: %s", err)
        return MetadataSchema()


def _resolve(text: str | bytes) -> MetadataSchema:
    root = _parse_document(text)

    schemas = [el for el in root.iter() if _local(el.tag) == "Schema"]
    if not schemas:
        raise MalformedMetadata("no Schema element found")

    # Prefer the schema that declares entity types; V4 services often put
    # the entity container in a second schema.
    schema = next((s for s in schemas if _children(s, "EntityType")), schemas[0])
    namespace = schema.get("Namespace") or ""
    alias = schema.get("Alias") or ""

    associations = _collect_associations(schema, namespace, alias)

    entities: list[EntityType] = []
    seen: set[str] = set()
    for et in _children(schema, "EntityType"):
        entity = _parse_entity(et, associations)
        if entity is None:
            continue
        if entity.name in seen:
            logger.warning("Duplicate entity type %r ignored", entity.name)
            continue
        seen.add(entity.name)
        entities.append(entity)

    _apply_partner_multiplicities(entities)

    return MetadataSchema(
        entities=entities,
        namespace=namespace or None,
        version=detect_odata_version(text),
    )


def _parse_document(text: str | bytes) -> ET.Element:
    if not text or not text.strip():
        raise MalformedMetadata("empty document")
    try:
        return ET.fromstring(text)
    except (ET.ParseError, ValueError, LookupError) as err:
        raise MalformedMetadata(f"not an XML document ({err})") from err


# ============================================================================
# Association pre-pass (V2/V3)
# ============================================================================


def _collect_associations(
    schema: ET.Element, namespace: str, alias: str
) -> Mapping[str, _Association]:
    """Map qualified, aliased and bare association names to their ends.

    Navigation properties reference associations in any of these forms.
    """
    table: dict[str, _Association] = {}

    for el in _children(schema, "Association"):
        name = el.get("Name")
        if not name:
            continue

        assoc = _Association()
        for end in _children(el, "End"):
            role = end.get("Role")
            type_ref = end.get("Type")
            if role and type_ref:
                assoc.ends[role] = _AssociationEnd(
                    type_name=_bare_name(type_ref),
                    multiplicity=_multiplicity(end.get("Multiplicity")),
                )

        rc = _first_child(el, "ReferentialConstraint")
        if rc is not None:
            assoc.constraint = _parse_association_constraint(rc)

        if namespace:
            table[f"{namespace}.{name}"] = assoc
        if alias:
            table[f"{alias}.{name}"] = assoc
        table[name] = assoc

    return MappingProxyType(table)


def _parse_association_constraint(rc: ET.Element) -> _Constraint | None:
    principal = _first_child(rc, "Principal")
    dependent = _first_child(rc, "Dependent")
    if principal is None or dependent is None:
        return None
    return _Constraint(
        principal_role=principal.get("Role") or "",
        principal_fields=_property_refs(principal),
        dependent_role=dependent.get("Role") or "",
        dependent_fields=_property_refs(dependent),
    )


# ============================================================================
# Entity pass
# ============================================================================


def _parse_entity(
    et: ET.Element, associations: Mapping[str, _Association]
) -> EntityType | None:
    name = et.get("Name")
    if not name:
        logger.debug("EntityType without a Name attribute skipped")
        return None

    properties: list[Property] = []
    names: set[str] = set()
    for prop in _children(et, "Property"):
        prop_name = prop.get("Name")
        if not prop_name or prop_name in names:
            continue
        names.add(prop_name)
        properties.append(Property(name=prop_name, type=prop.get("Type") or ""))

    keys: list[str] = []
    key_el = _first_child(et, "Key")
    if key_el is not None:
        for key_name in _property_refs(key_el):
            if key_name in names and key_name not in keys:
                keys.append(key_name)
            else:
                logger.debug("Key %r of %s does not name a declared property", key_name, name)

    navigation = [
        _resolve_navigation(name, nav, associations)
        for nav in _children(et, "NavigationProperty")
    ]

    return EntityType(name=name, keys=keys, properties=properties, navigation_properties=navigation)


def _resolve_navigation(
    entity_name: str, nav: ET.Element, associations: Mapping[str, _Association]
) -> NavigationProperty:
    """Resolve one navigation property's target entity.

    A direct Type reference (V4) wins; otherwise the Relationship/ToRole pair
    (V2/V3) is looked up in the association table.
    """
    name = nav.get("Name") or "Unknown"
    type_ref = (nav.get("Type") or "").strip()

    if type_ref:
        result = _resolve_typed_navigation(name, nav, type_ref)
    else:
        result = _resolve_associated_navigation(name, nav, associations)

    if result.target_type_name is None:
        logger.debug("Unresolved navigation property %s.%s", entity_name, name)
    return result


def _resolve_typed_navigation(name: str, nav: ET.Element, type_ref: str) -> NavigationProperty:
    type_ref = type_ref.strip()
    match = _COLLECTION_RE.match(type_ref)
    if match:
        inner = match.group(1)
        multiplicity: Multiplicity = "*"
    else:
        inner = type_ref
        multiplicity = "1" if nav.get("Nullable") == "false" else "0..1"

    constraints: list[tuple[str, str]] = []
    for rc in _children(nav, "ReferentialConstraint"):
        prop = rc.get("Property")
        referenced = rc.get("ReferencedProperty")
        if prop and referenced:
            constraints.append((prop, referenced))

    return NavigationProperty(
        name=name,
        target_type_name=_bare_name(inner) or None,
        target_multiplicity=multiplicity,
        partner=nav.get("Partner"),
        field_constraints=constraints,
    )


def _resolve_associated_navigation(
    name: str, nav: ET.Element, associations: Mapping[str, _Association]
) -> NavigationProperty:
    relationship = nav.get("Relationship")
    to_role = nav.get("ToRole")
    from_role = nav.get("FromRole")

    result = NavigationProperty(
        name=name,
        target_type_name=None,
        relationship_ref=relationship,
        to_role=to_role,
        from_role=from_role,
    )
    if not relationship or not to_role:
        return result

    assoc = associations.get(relationship) or associations.get(_bare_name(relationship))
    if assoc is None:
        return result
    target_end = assoc.ends.get(to_role)
    if target_end is None:
        return result

    result.target_type_name = target_end.type_name
    result.target_multiplicity = target_end.multiplicity
    source_end = assoc.ends.get(from_role) if from_role else None
    if source_end is not None:
        result.source_multiplicity = source_end.multiplicity
    if assoc.constraint is not None and from_role:
        result.field_constraints = _orient_constraint(assoc.constraint, from_role, to_role)
    return result


def _orient_constraint(
    constraint: _Constraint, from_role: str, to_role: str
) -> list[tuple[str, str]]:
    """Express an association constraint as (source_field, target_field) pairs."""
    if constraint.principal_role == from_role and constraint.dependent_role == to_role:
        return list(zip(constraint.principal_fields, constraint.dependent_fields))
    if constraint.dependent_role == from_role and constraint.principal_role == to_role:
        return list(zip(constraint.dependent_fields, constraint.principal_fields))
    return []


def _apply_partner_multiplicities(entities: list[EntityType]) -> None:
    """Fill V4 source multiplicities from the partner navigation, if declared."""
    by_name = {e.name: e for e in entities}
    for entity in entities:
        for nav in entity.navigation_properties:
            if nav.partner is None or nav.source_multiplicity is not None:
                continue
            target = by_name.get(nav.target_type_name or "")
            if target is None:
                continue
            for other in target.navigation_properties:
                if other.name == nav.partner:
                    nav.source_multiplicity = other.target_multiplicity
                    break


# ============================================================================
# Element helpers
# ============================================================================


def _local(tag: str) -> str:
    """Strip the '{namespace-uri}' prefix ElementTree puts on tag names."""
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _children(el: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in el if _local(child.tag) == name]


def _first_child(el: ET.Element, name: str) -> ET.Element | None:
    for child in el:
        if _local(child.tag) == name:
            return child
    return None


def _property_refs(el: ET.Element) -> list[str]:
    return [ref.get("Name") or "" for ref in _children(el, "PropertyRef") if ref.get("Name")]


def _bare_name(type_ref: str) -> str:
    """'NorthwindModel.Order' -> 'Order'."""
    return type_ref.strip().rsplit(".", 1)[-1]


def _multiplicity(value: str | None) -> Multiplicity | None:
    if value in _MULTIPLICITIES:
        return value  # type: ignore[return-value]
    return None
