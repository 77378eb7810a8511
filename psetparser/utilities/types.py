from enum import Enum, auto


class ItemKind(Enum):
    """Kind of definition document that is parsed.

    property_set: Pset_ pages, rows are Name | Property Type | Data Type |
        Description
    quantity_set: Qto_ pages, rows are Name | Data Type | Description
    """
    property_set = auto()
    quantity_set = auto()

    @property
    def expected_cells(self) -> int:
        """Number of <td> cells a row of the properties table holds."""
        return 3 if self is ItemKind.quantity_set else 4


class PropertyKind(Enum):
    """Discriminator of the property data type shapes.

    The values are the IFC entity names used in the 'Property Type' column of
    the documentation tables.
    """
    single_value = 'IfcPropertySingleValue'
    enumerated_value = 'IfcPropertyEnumeratedValue'
    table_value = 'IfcPropertyTableValue'
    bounded_value = 'IfcPropertyBoundedValue'
    list_value = 'IfcPropertyListValue'
    reference_value = 'IfcPropertyReferenceValue'

    @classmethod
    def from_label(cls, label: str):
        """Case insensitive lookup by IFC entity name, None if unknown."""
        for kind in cls:
            if kind.value.lower() == label.lower():
                return kind
        return None
