"""Python representation of IFC property and quantity set definitions.

All classes are frozen dataclasses. Equality and hashing of PropertyEntry
cover the name and the complete data type, so a set of entries collapses
rows that are exact duplicates.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from psetparser.utilities.types import ItemKind, PropertyKind


@dataclass(frozen=True)
class NameAlias:
    """Localized name of an enumeration literal."""
    value: str
    lang: str


@dataclass(frozen=True)
class EnumLiteral:
    """Single literal of a property enumeration, e.g. 'BLACK'.

    Aliases are not filled by the html parser.
    """
    name: str
    aliases: Tuple[NameAlias, ...] = ()


class PropertyDataType:
    """Base of the data type shapes a property can have.

    Subclasses set ``kind``, the PropertyKind discriminator.
    """
    kind: PropertyKind = None


@dataclass(frozen=True)
class SingleValue(PropertyDataType):
    measure_type: str
    kind = PropertyKind.single_value


@dataclass(frozen=True)
class BoundedValue(PropertyDataType):
    measure_type: str
    kind = PropertyKind.bounded_value


@dataclass(frozen=True)
class ListValue(PropertyDataType):
    measure_type: str
    kind = PropertyKind.list_value


@dataclass(frozen=True)
class ReferenceValue(PropertyDataType):
    referenced_entity: str
    kind = PropertyKind.reference_value


@dataclass(frozen=True)
class EnumeratedValue(PropertyDataType):
    """Enumerated property.

    ``literals`` is the tuple held by the EnumerationCache. It is shared
    between all properties referencing the same enumeration.
    """
    enum_name: str
    literals: Tuple[EnumLiteral, ...]
    kind = PropertyKind.enumerated_value


@dataclass(frozen=True)
class TableValue(PropertyDataType):
    """Table property, for 'A/B' data types A is the defined and B the
    defining value type."""
    defined_type: str
    defining_type: str
    kind = PropertyKind.table_value


@dataclass(frozen=True)
class PropertyEntry:
    name: str
    data_type: PropertyDataType


@dataclass(frozen=True)
class SchemaDefinition:
    """Parsed definition of one Pset_ or Qto_ documentation page.

    Args:
        name: e.g. 'Pset_WallCommon'
        schema_version: normalized IFC version, e.g. 'IFC4X3'
        applicable_classes: IFC entities the set applies to, in page order
        applicable_type: the first applicable class
        predefined_type_hint: the last predefined type qualifier found
        properties: distinct property entries
        item_kind: kind the page was parsed as
    """
    name: str
    schema_version: str
    applicable_classes: Tuple[str, ...] = ()
    applicable_type: Optional[str] = None
    predefined_type_hint: Optional[str] = None
    properties: FrozenSet[PropertyEntry] = field(default_factory=frozenset)
    item_kind: ItemKind = ItemKind.property_set

    @property
    def is_quantity_set(self) -> bool:
        return self.item_kind is ItemKind.quantity_set

    def get_property(self, name: str) -> Optional[PropertyEntry]:
        for entry in self.properties:
            if entry.name == name:
                return entry
        return None


def data_type_to_dict(data_type: PropertyDataType) -> dict:
    """Converts a property data type to plain python data."""
    if not isinstance(data_type, PropertyDataType) or data_type.kind is None:
        raise TypeError(
            "No property data type: '%s'" % type(data_type).__name__)
    data = {'kind': data_type.kind.value}
    if isinstance(data_type, (SingleValue, BoundedValue, ListValue)):
        data['measure_type'] = data_type.measure_type
    elif isinstance(data_type, ReferenceValue):
        data['referenced_entity'] = data_type.referenced_entity
    elif isinstance(data_type, EnumeratedValue):
        data['enum_name'] = data_type.enum_name
        data['literals'] = [literal.name for literal in data_type.literals]
    elif isinstance(data_type, TableValue):
        data['defined_type'] = data_type.defined_type
        data['defining_type'] = data_type.defining_type
    else:
        raise TypeError(
            "Unsupported data type '%s'" % type(data_type).__name__)
    return data


def schema_to_dict(schema: SchemaDefinition) -> dict:
    """Converts a SchemaDefinition to plain python data, e.g. for json.

    Properties are sorted by name to get a stable output.
    """
    properties = []
    for entry in sorted(schema.properties,
                        key=lambda e: (e.name, e.data_type.kind.value)):
        prop = {'name': entry.name}
        prop.update(data_type_to_dict(entry.data_type))
        properties.append(prop)
    return {
        'name': schema.name,
        'schema_version': schema.schema_version,
        'applicable_classes': list(schema.applicable_classes),
        'applicable_type': schema.applicable_type,
        'predefined_type_hint': schema.predefined_type_hint,
        'item_kind': schema.item_kind.name,
        'properties': properties,
    }
