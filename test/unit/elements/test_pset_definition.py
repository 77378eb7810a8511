"""Test for pset_definition.py"""
import dataclasses
import json
import unittest

from psetparser.elements.pset_definition import BoundedValue, EnumLiteral, \
    EnumeratedValue, ListValue, PropertyDataType, PropertyEntry, \
    ReferenceValue, SchemaDefinition, SingleValue, TableValue, \
    data_type_to_dict, schema_to_dict
from psetparser.utilities.types import ItemKind, PropertyKind


class TestPsetDefinition(unittest.TestCase):

    def setUp(self):
        literals = (EnumLiteral('NEW'), EnumLiteral('EXISTING'))
        self.schema = SchemaDefinition(
            name='Pset_WallCommon',
            schema_version='IFC4',
            applicable_classes=('IfcWall', 'IfcWallType'),
            applicable_type='IfcWall',
            properties=frozenset({
                PropertyEntry('FireRating', SingleValue('IfcLabel')),
                PropertyEntry('Status',
                              EnumeratedValue('PEnum_Status', literals)),
                PropertyEntry('PowerLoss',
                              TableValue('IfcPowerMeasure', 'IfcLabel')),
            }))

    def test_kind_discriminator(self):
        self.assertIs(SingleValue('IfcLabel').kind, PropertyKind.single_value)
        self.assertIs(BoundedValue('IfcLabel').kind,
                      PropertyKind.bounded_value)
        self.assertIs(ListValue('IfcLabel').kind, PropertyKind.list_value)
        self.assertIs(ReferenceValue('IfcMaterial').kind,
                      PropertyKind.reference_value)
        self.assertIs(TableValue('A', 'B').kind, PropertyKind.table_value)

    def test_same_measure_different_kind_differ(self):
        self.assertNotEqual(SingleValue('IfcLabel'), ListValue('IfcLabel'))
        self.assertEqual(
            len({PropertyEntry('Names', SingleValue('IfcLabel')),
                 PropertyEntry('Names', ListValue('IfcLabel'))}), 2)

    def test_entries_are_frozen(self):
        entry = PropertyEntry('FireRating', SingleValue('IfcLabel'))
        with self.assertRaises(dataclasses.FrozenInstanceError):
            entry.name = 'Other'

    def test_get_property(self):
        self.assertEqual(self.schema.get_property('FireRating').data_type,
                         SingleValue('IfcLabel'))
        self.assertIsNone(self.schema.get_property('Missing'))
        self.assertFalse(self.schema.is_quantity_set)

    def test_data_type_to_dict(self):
        self.assertEqual(
            data_type_to_dict(TableValue('IfcPowerMeasure', 'IfcLabel')),
            {'kind': 'IfcPropertyTableValue',
             'defined_type': 'IfcPowerMeasure', 'defining_type': 'IfcLabel'})
        self.assertEqual(
            data_type_to_dict(ReferenceValue('IfcMaterial')),
            {'kind': 'IfcPropertyReferenceValue',
             'referenced_entity': 'IfcMaterial'})

    def test_unknown_data_type(self):
        class CustomValue(PropertyDataType):
            kind = PropertyKind.single_value

        with self.assertRaises(TypeError):
            data_type_to_dict(CustomValue())
        with self.assertRaises(TypeError):
            data_type_to_dict('IfcLabel')

    def test_quantity_set_from_item_kind(self):
        self.assertFalse(
            SchemaDefinition('Qto_WallBaseQuantities', 'IFC4').is_quantity_set)
        schema = SchemaDefinition('Pset_WallCommon', 'IFC4',
                                  item_kind=ItemKind.quantity_set)
        self.assertTrue(schema.is_quantity_set)
        self.assertEqual(schema_to_dict(schema)['item_kind'], 'quantity_set')

    def test_schema_to_dict_is_json_serializable(self):
        data = schema_to_dict(self.schema)
        self.assertEqual(json.loads(json.dumps(data)), data)
        self.assertEqual([prop['name'] for prop in data['properties']],
                         ['FireRating', 'PowerLoss', 'Status'])
        self.assertEqual(data['properties'][2]['literals'],
                         ['NEW', 'EXISTING'])
        self.assertEqual(data['applicable_classes'], ['IfcWall', 'IfcWallType'])


if __name__ == '__main__':
    unittest.main()
