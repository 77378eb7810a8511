"""Parser for html property and quantity set definition pages.

The pages are taken from the 'lexical' folder of the IFC documentation. One
page holds one Pset_ or Qto_ definition, enumerations of enumerated
properties are separate PEnum_ pages in the same folder.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Optional, Union

from psetparser.elements.pset_definition import PropertyEntry, \
    SchemaDefinition
from psetparser.kernel import DocumentParseError, MalformedRow, \
    PropertiesTableNotFound, PsetParseError, log
from psetparser.kernel.enum_cache import EnumerationCache
from psetparser.mapping import html2python
from psetparser.mapping.html2python import Markup
from psetparser.mapping.type_mapping import map_property_type, \
    map_quantity_type
from psetparser.settings import ParserSettings
from psetparser.utilities.types import ItemKind


class HtmlPsetDefinitionParser:
    """Builds a SchemaDefinition from the markup of one definition page.

    A page is parsed completely or not at all, the first problem raises a
    PsetParseError and no partial definition is returned.

    Args:
        cache: cache for enumerations, shared by all parsers of a run. A new
            cache is created if none is given.
        settings: parser settings, defaults are used if none are given
        logger: logger for diagnostic messages
    """

    def __init__(self, cache: EnumerationCache = None,
                 settings: ParserSettings = None, logger=None):
        self.settings = settings if settings is not None else ParserSettings()
        if cache is None:
            cache = EnumerationCache(
                file_extension=f".{self.settings.enum_file_extension}")
        self.cache = cache
        self.logger = logger if logger is not None else log.get_user_logger(
            "%s.%s" % (__name__, self.__class__.__name__))
        self.quality_logger = log.get_quality_logger()

    def parse(self, document: Markup, directory: Union[str, Path],
              item_kind: Optional[ItemKind] = None) -> SchemaDefinition:
        """Parse a definition page.

        Args:
            document: markup of the page
            directory: folder of the page, enumeration pages are searched
                there
            item_kind: kind of the page. If not given, the kind from the
                settings is used, or quantity set for Qto_ pages if
                item_kind_from_name is set.

        Returns:
            the parsed SchemaDefinition
        """
        soup = html2python.make_soup(document)
        name = html2python.extract_set_name(soup)
        try:
            if item_kind is None:
                item_kind = self.settings.item_kind
                if self.settings.item_kind_from_name \
                        and name.startswith('Qto_'):
                    item_kind = ItemKind.quantity_set
            schema_version = html2python.normalize_ifc_version(
                html2python.extract_ifc_version(soup))
            classes, applicable_type, predefined_type = \
                html2python.extract_applicable_entities(soup)
            properties = self.extract_properties(soup, directory, item_kind)
        except PsetParseError as ex:
            ex.with_context(set_name=name)
            raise

        self.logger.debug(
            f"Parsed {name} ({schema_version}) with {len(properties)} "
            f"{'quantities' if item_kind is ItemKind.quantity_set else 'properties'}")
        return SchemaDefinition(
            name=name,
            schema_version=schema_version,
            applicable_classes=tuple(classes),
            applicable_type=applicable_type,
            predefined_type_hint=predefined_type,
            properties=properties,
            item_kind=item_kind,
        )

    def extract_properties(self, document: Markup,
                           directory: Union[str, Path],
                           item_kind: ItemKind) -> FrozenSet[PropertyEntry]:
        """Property entries of the properties table.

        Rows that are exact duplicates of earlier rows collapse into one
        entry.

        Raises:
            PropertiesTableNotFound: no 'Properties' section or no table in it
        """
        table = html2python.extract_table(
            html2python.extract_section(document, 'Properties'))
        if table is None:
            raise PropertiesTableNotFound("Properties table not found in HTML")

        properties = set()
        for index, row in enumerate(html2python.extract_rows(table)):
            entry = self.parse_property_row(row, directory, item_kind, index)
            if entry in properties:
                self.quality_logger.info(
                    f"Duplicate definition of {entry.name} in row {index} "
                    f"is ignored")
            properties.add(entry)
        return frozenset(properties)

    def parse_property_row(self, row: Markup, directory: Union[str, Path],
                           item_kind: ItemKind,
                           index: int = 0) -> PropertyEntry:
        """Parse a single row of the properties table.

        QTO format: Name | Data Type | Description (3 cells)
        Pset format: Name | Property Type | Data Type | Description (4 cells)
        """
        cells = html2python.extract_cells(row)
        expected = item_kind.expected_cells
        if len(cells) < expected or (
                self.settings.strict_cell_count and len(cells) != expected):
            raise MalformedRow(
                f"Property row has wrong number of cells (expected "
                f"{expected}, found {len(cells)})", row=index)

        name = html2python.strip_html_tags(cells[0])
        if not name:
            raise MalformedRow("Property row has no name", row=index)
        try:
            if item_kind is ItemKind.quantity_set:
                data_type = map_quantity_type(
                    html2python.resolve_data_type(cells[1]))
            else:
                property_type = html2python.extract_type_ref(cells[1])
                data_type = map_property_type(
                    property_type, html2python.resolve_data_type(cells[2]),
                    directory, self.cache)
        except PsetParseError as ex:
            ex.with_context(row=index, property=name)
            raise
        return PropertyEntry(name=name, data_type=data_type)


class ParserSession:
    """Parses a batch of definition pages with one shared enumeration cache.

    Args:
        settings: settings of the run
        cache: enumeration cache, a new one is created if none is given
    """

    def __init__(self, settings: ParserSettings = None,
                 cache: EnumerationCache = None):
        self.settings = settings if settings is not None else ParserSettings()
        if cache is None:
            cache = EnumerationCache(
                file_extension=f".{self.settings.enum_file_extension}")
        self.cache = cache
        self.logger = log.get_user_logger(
            "%s.%s" % (__name__, self.__class__.__name__))
        self.quality_logger = log.get_quality_logger()
        self.parser = HtmlPsetDefinitionParser(
            cache=self.cache, settings=self.settings, logger=self.logger)
        self.failed: Dict[str, DocumentParseError] = {}

    def parse_file(self, path: Union[str, Path],
                   item_kind: Optional[ItemKind] = None) -> SchemaDefinition:
        """Parse a definition page file.

        Raises:
            DocumentParseError: with the original error as __cause__
        """
        path = Path(path)
        try:
            document = html2python.load_html(path)
            schema = self.parser.parse(document, path.parent, item_kind)
        except PsetParseError as ex:
            raise DocumentParseError(
                f"Failed to parse HTML file {path}: {ex}",
                path=str(path)) from ex
        self.logger.info(f"Parsed {schema.name} from {path.name}")
        return schema

    def parse_files(self, paths: Iterable[Union[str, Path]],
                    item_kind: Optional[ItemKind] = None) \
            -> Dict[str, SchemaDefinition]:
        """Parse several definition pages.

        Returns:
            dict with the set names as keys and the definitions as values, in
            the order of the given paths

        Raises:
            DocumentParseError: for the first failing page, unless
                skip_failed_documents is set. Skipped pages are stored in
                self.failed.
        """
        schemas = {}
        for path in paths:
            try:
                schema = self.parse_file(path, item_kind)
            except DocumentParseError as ex:
                self.quality_logger.error(str(ex))
                if not self.settings.skip_failed_documents:
                    raise
                self.logger.warning(
                    f"Skipping {Path(path).name}: {ex.__cause__}")
                self.failed[str(path)] = ex
                continue
            if schema.name in schemas:
                self.quality_logger.warning(
                    f"{schema.name} is defined more than once, keeping the "
                    f"definition from {path}")
            schemas[schema.name] = schema
        self.logger.info(
            f"Parsed {len(schemas)} definitions, {len(self.failed)} failed, "
            f"{len(self.cache)} enumerations loaded")
        return schemas
