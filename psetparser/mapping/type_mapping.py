"""Mapping of the type columns of the documentation tables to data types.

Property sets name the property type explicitly (IfcPropertySingleValue,
...), quantity sets only name the quantity type (IfcQuantityLength, ...).
Unknown property types are an error, unknown quantity types fall back to a
single value of that type.
"""
import logging
from pathlib import Path
from typing import Union

from psetparser.elements.pset_definition import (
    BoundedValue, EnumeratedValue, ListValue, PropertyDataType,
    ReferenceValue, SingleValue, TableValue)
from psetparser.kernel import UnknownPropertyKind
from psetparser.kernel.enum_cache import EnumerationCache
from psetparser.utilities.types import PropertyKind

logger = logging.getLogger(__name__)

QUANTITY_MEASURES = {
    'ifcquantitylength': 'IfcLengthMeasure',
    'ifcquantityarea': 'IfcAreaMeasure',
    'ifcquantityvolume': 'IfcVolumeMeasure',
    'ifcquantityweight': 'IfcMassMeasure',
    'ifcquantitycount': 'IfcCountMeasure',
    'ifcquantitytime': 'IfcTimeMeasure',
}


def map_quantity_type(quantity_type: str) -> SingleValue:
    """Data type of a quantity, e.g. IfcLengthMeasure for IfcQuantityLength.

    Unknown quantity types are kept as measure type.
    """
    measure = QUANTITY_MEASURES.get(quantity_type.lower())
    if measure is None:
        logger.warning(f"Unknown quantity type {quantity_type}, using it as "
                       f"measure type")
        measure = quantity_type
    return SingleValue(measure_type=measure)


def parse_table_value(data_type: str) -> TableValue:
    """Table value for 'Defined/Defining' or a single data type."""
    if '/' in data_type:
        defined_type, defining_type = data_type.split('/')[:2]
    else:
        defined_type = defining_type = data_type
    return TableValue(defined_type=defined_type, defining_type=defining_type)


def parse_enumerated_value(enum_name: str, directory: Union[str, Path],
                           cache: EnumerationCache) -> EnumeratedValue:
    return EnumeratedValue(enum_name=enum_name,
                           literals=cache.resolve(enum_name, directory))


def map_property_type(property_type: str, data_type: str,
                      directory: Union[str, Path],
                      cache: EnumerationCache) -> PropertyDataType:
    """Data type of a property from its property type and data type column.

    Args:
        property_type: label of the property type, e.g.
            'IfcPropertySingleValue' (case insensitive)
        data_type: resolved data type, e.g. 'IfcLabel', compound table types
            as 'IfcPowerMeasure/IfcThermodynamicTemperatureMeasure' and
            enumerations by their name 'PEnum_Status'
        directory: folder holding the enumeration files
        cache: cache for enumerations

    Raises:
        UnknownPropertyKind: property type is no known IfcProperty
    """
    kind = PropertyKind.from_label(property_type)
    if kind is PropertyKind.single_value:
        return SingleValue(measure_type=data_type)
    elif kind is PropertyKind.enumerated_value:
        return parse_enumerated_value(data_type, directory, cache)
    elif kind is PropertyKind.table_value:
        return parse_table_value(data_type)
    elif kind is PropertyKind.bounded_value:
        return BoundedValue(measure_type=data_type)
    elif kind is PropertyKind.list_value:
        return ListValue(measure_type=data_type)
    elif kind is PropertyKind.reference_value:
        return ReferenceValue(referenced_entity=data_type)
    raise UnknownPropertyKind(property_type)
