"""Parse all definition pages of the lexical test folder in one session."""
import unittest

from psetparser.elements.pset_definition import BoundedValue, \
    EnumeratedValue, ListValue, ReferenceValue, SingleValue, TableValue
from psetparser.parser import ParserSession
from test.unit.helper import lexical_path


class TestLexicalFolder(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        paths = sorted(path for path in lexical_path.glob('*.htm')
                       if not path.name.startswith('PEnum_'))
        cls.session = ParserSession()
        cls.schemas = cls.session.parse_files(paths)

    def test_all_pages_parsed(self):
        self.assertEqual(sorted(self.schemas), [
            'Pset_CableSegmentOccurrence', 'Pset_WallCommon',
            'Qto_WallBaseQuantities'])
        self.assertEqual(self.session.failed, {})

    def test_wall_common(self):
        schema = self.schemas['Pset_WallCommon']
        self.assertEqual(schema.schema_version, 'IFC4X3')
        self.assertEqual(schema.applicable_type, 'IfcWall')
        self.assertEqual(schema.get_property('IsExternal').data_type,
                         SingleValue('IfcBoolean'))
        status = schema.get_property('Status').data_type
        self.assertIsInstance(status, EnumeratedValue)
        self.assertEqual(
            [literal.name for literal in status.literals],
            ['NEW', 'EXISTING', 'DEMOLISH', 'TEMPORARY', 'OTHER', 'NOTKNOWN',
             'UNSET'])

    def test_wall_quantities(self):
        schema = self.schemas['Qto_WallBaseQuantities']
        self.assertTrue(schema.is_quantity_set)
        self.assertEqual(
            {entry.name: entry.data_type.measure_type
             for entry in schema.properties},
            {'Length': 'IfcLengthMeasure', 'Width': 'IfcLengthMeasure',
             'GrossFootprintArea': 'IfcAreaMeasure',
             'NetVolume': 'IfcVolumeMeasure', 'GrossWeight': 'IfcMassMeasure'})

    def test_cable_segment_occurrence(self):
        schema = self.schemas['Pset_CableSegmentOccurrence']
        self.assertEqual(schema.applicable_classes,
                         ('IfcCableSegment', 'IfcCableSegment'))
        self.assertEqual(schema.predefined_type_hint, 'CORESEGMENT')
        kinds = {type(entry.data_type) for entry in schema.properties}
        self.assertEqual(kinds, {EnumeratedValue, TableValue, BoundedValue,
                                 ListValue, ReferenceValue})


if __name__ == '__main__':
    unittest.main()
