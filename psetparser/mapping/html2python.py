"""Module to convert html documentation pages to python data.

The functions work on the markup of the IFC documentation 'lexical' pages.
They accept markup strings (or an already parsed BeautifulSoup/Tag) and
return markup strings, so the result of one step can be handed to the next
one and link references inside cells survive until they are resolved.

Example of the relevant parts of a property set page::

    <h1>6.1.4.23 Pset_WallCommon</h1>
    <header><p>IFC 4.3.2.0 (IFC4X3_ADD2)</p></header>
    <h2><a class="anchor" id="6.1.4.23.2-Applicable-entities"></a>
        6.1.4.23.2 Applicable entities <a class="link" href="#...">&para;</a>
    </h2>
    <ul><li><a href="IfcWall.htm">IfcWall</a></li></ul>
    <h2>... 6.1.4.23.3 Properties ...</h2>
    <table><thead>...</thead><tbody>
        <tr><td>FireRating</td>
            <td><a href="IfcPropertySingleValue.htm">IfcPropertySingleValue</a></td>
            <td><a href="IfcLabel.htm">IfcLabel</a></td><td>...</td></tr>
    </tbody></table>
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from bs4 import BeautifulSoup, NavigableString, Tag

from psetparser.kernel import (
    ApplicableEntitiesNotFound, DocumentReadError, NameNotFound,
    ReferenceNotFound, UnrecognizedVersion, VersionNotFound)

logger = logging.getLogger(__name__)

Markup = Union[str, BeautifulSoup, Tag]

HEADING_TAGS = ['h1', 'h2', 'h3', 'h4', 'h5', 'h6']
SECTION_HEADING = 'h2'
# '7.2.5.1.3 ' in front of section titles
NUMBER_PREFIX = re.compile(r'^\d+(?:\.\d+)*\.?\s+')
SET_NAME_PATTERN = re.compile(r'(?<![A-Za-z0-9])(Pset_\w+|Qto_\w+)')
VERSION_PATTERN = re.compile(r'\(([^)]+)\)')
REFERENCE_LABEL = re.compile(r'^\w+$')
APPLICABLE_ENTITY = re.compile(r'^(\w+)(?:\s*/\s*(\w+))?$')


def load_html(path: Union[str, Path]) -> str:
    """Reads a documentation page from disk.

    Args:
        path: path to the .htm file

    Returns:
        content of the file as text

    Raises:
        DocumentReadError: if the file can't be read, the OSError is kept as
            __cause__
    """
    path = Path(path)
    logger.debug(f"Reading {path.name} from {path.parent}")
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as ex:
        raise DocumentReadError(
            f"Can't read file: {ex}", path=str(path)) from ex


def make_soup(markup: Markup) -> Union[BeautifulSoup, Tag]:
    """Returns parsed markup, already parsed markup is returned as is.

    Uses the stdlib html.parser tree builder, which in contrast to lxml and
    html5lib does not add missing <tbody> or <html> elements.
    """
    if isinstance(markup, Tag):
        return markup
    return BeautifulSoup(markup, 'html.parser')


def strip_html_tags(markup: Markup) -> str:
    """Visible text of the markup with whitespace collapsed."""
    return ' '.join(make_soup(markup).get_text().split())


def heading_title(heading: Tag) -> str:
    """Title of a heading without section number, anchor and link.

    Only the text nodes directly inside the heading are used, as the anchor
    and the permalink are nested <a> elements.
    """
    text = ''.join(
        str(s) for s in heading.children if isinstance(s, NavigableString))
    if not text.strip():
        text = heading.get_text(' ')
    text = ' '.join(text.split())
    return NUMBER_PREFIX.sub('', text)


def _heading_level(tag: Tag) -> int:
    return int(tag.name[1])


def find_section_heading(document: Markup, title: str,
                         tag: str = SECTION_HEADING) -> Optional[Tag]:
    """Returns the first heading with the given title (case insensitive).

    Only headings of the given tag are searched, sections of the
    documentation pages are <h2> headings and sub sections with the same
    title (e.g. a <h3>Properties</h3> in a changelog) are ignored.
    """
    soup = make_soup(document)
    for heading in soup.find_all(tag):
        if heading_title(heading).lower() == title.lower():
            return heading
    return None


def _collect_until(nodes, stop: Optional[Tag], parts: List[str]) -> bool:
    """Appends the markup of the nodes to parts until stop is reached.

    A node that contains stop is descended into, so only its content before
    stop is collected. Returns True if stop was reached.
    """
    for node in nodes:
        if node is stop:
            return True
        if stop is not None and isinstance(node, Tag) \
                and any(parent is node for parent in stop.parents):
            _collect_until(node.children, stop, parts)
            return True
        parts.append(str(node))
    return False


def extract_section(document: Markup, title: str) -> str:
    """Extract the content of a titled section.

    The content is everything after the heading up to the next heading of
    the same or a higher level, wherever that heading is nested, or the end
    of the enclosing element.

    Args:
        document: full page markup
        title: title of the section, e.g. 'Properties'

    Returns:
        markup of the section, empty string if no such section exists
    """
    heading = find_section_heading(document, title)
    if heading is None:
        return ''
    level = _heading_level(heading)
    stop = heading.find_next(
        lambda t: t.name in HEADING_TAGS and _heading_level(t) <= level)
    parts = []
    _collect_until(heading.next_siblings, stop, parts)
    return ''.join(parts)


def extract_table(section: Markup) -> Optional[str]:
    """Inner markup of the first <table> of a section or None."""
    table = make_soup(section).find('table')
    if table is None:
        return None
    return table.decode_contents()


def extract_rows(table: Markup) -> List[str]:
    """Inner markup of all <tr> rows in the <tbody> of a table.

    Header rows in <thead> are not part of the result. A table without
    <tbody> has no data rows and an empty list is returned.
    """
    tbody = make_soup(table).find('tbody')
    if tbody is None:
        return []
    return [row.decode_contents()
            for row in tbody.find_all('tr', recursive=False)]


def extract_cells(row: Markup) -> List[str]:
    """Inner markup of all <td> cells of a row."""
    return [cell.decode_contents()
            for cell in make_soup(row).find_all('td', recursive=False)]


def extract_type_refs(cell: Markup) -> List[str]:
    """Labels of all link references in a cell.

    A reference is an <a href="IfcLabel.htm">IfcLabel</a> element, its label
    (not its target) is returned. Compound data types like
    IfcPowerMeasure/IfcThermodynamicTemperatureMeasure give two labels.

    Raises:
        ReferenceNotFound: if the cell holds no reference
    """
    refs = []
    for link in make_soup(cell).find_all('a', href=True):
        label = link.get_text(strip=True)
        if REFERENCE_LABEL.match(label):
            refs.append(label)
    if not refs:
        raise ReferenceNotFound(
            f"No type reference found in table cell "
            f"'{strip_html_tags(cell)}'")
    return refs


def extract_type_ref(cell: Markup) -> str:
    """Label of the first link reference in a cell."""
    return extract_type_refs(cell)[0]


def resolve_data_type(cell: Markup) -> str:
    """Data type of a cell, compound types are joined with '/'."""
    return '/'.join(extract_type_refs(cell))


def extract_set_name(document: Markup) -> str:
    """Name of the property or quantity set from the <h1> heading.

    Raises:
        NameNotFound: no <h1> holds a Pset_ or Qto_ name
    """
    for heading in make_soup(document).find_all('h1'):
        match = SET_NAME_PATTERN.search(heading.get_text())
        if match:
            return match.group(1)
    raise NameNotFound("Property Set or QTO Set name not found in h1 tag")


def extract_ifc_version(document: Markup) -> str:
    """Raw IFC version from the page header, e.g. 'IFC4X3_ADD2' for
    <header><p>IFC 4.3.2.0 (IFC4X3_ADD2)</p></header>.

    Raises:
        VersionNotFound: no header or no version in brackets
    """
    header = make_soup(document).find('header')
    if header is not None:
        for paragraph in header.find_all('p'):
            match = VERSION_PATTERN.search(paragraph.get_text())
            if match:
                return match.group(1).strip()
    raise VersionNotFound("IFC Version not found in header section")


def normalize_ifc_version(ifc_version: str) -> str:
    """Normalize IFC version to the tags used for property set definitions.

    '2X', '2X2' and '2.X' become 'IFC2X2', everything starting with 'IFC2X3'
    becomes 'IFC2X3', everything starting with 'IFC4X3' becomes 'IFC4X3' and
    all other 'IFC4' versions are returned in upper case.

    Raises:
        UnrecognizedVersion: for all other versions
    """
    version = ifc_version.strip().upper()
    if version in ('2X', '2X2', '2.X'):
        return 'IFC2X2'
    elif version.startswith('IFC2X3'):
        return 'IFC2X3'
    elif version.startswith('IFC4X3'):
        return 'IFC4X3'
    elif version.startswith('IFC4'):
        return version
    raise UnrecognizedVersion(ifc_version)


def extract_applicable_entities(document: Markup) \
        -> Tuple[List[str], Optional[str], Optional[str]]:
    """Applicable classes and predefined type of a set.

    List items look like <li><a href="IfcWall.htm">IfcWall</a></li> or
    <li><a href="IfcCableSegment.htm">IfcCableSegment</a>/CORESEGMENT</li>.

    Returns:
        classes: all applicable classes in page order
        applicable_type: the first class, the others are ignored
        predefined_type: the last predefined type found

    Raises:
        ApplicableEntitiesNotFound: if the section does not exist, an empty
            section is allowed
    """
    soup = make_soup(document)
    if find_section_heading(soup, 'Applicable entities') is None:
        raise ApplicableEntitiesNotFound(
            "Applicable entities section not found")
    section = make_soup(extract_section(soup, 'Applicable entities'))

    classes = []
    predefined_types = []
    for item in section.find_all('li'):
        link = item.find('a', href=True)
        match = APPLICABLE_ENTITY.match(' '.join(item.get_text().split()))
        if link is None or match is None \
                or link.get_text(strip=True) != match.group(1):
            logger.debug(f"Skipping applicable entity list item "
                         f"'{strip_html_tags(item)}'")
            continue
        classes.append(match.group(1))
        if match.group(2):
            predefined_types.append(match.group(2))

    applicable_type = classes[0] if classes else None
    predefined_type = predefined_types[-1] if predefined_types else None
    return classes, applicable_type, predefined_type


def extract_enum_literals(document: Markup) -> List[str]:
    """Enumeration literals of a PEnum_ page.

    Literals are table cells holding a <code> element, e.g.
    <td><code>BLACK</code></td>, they are returned in page order.
    """
    literals = []
    for cell in make_soup(document).find_all('td'):
        content = [child for child in cell.children
                   if not (isinstance(child, NavigableString)
                           and not child.strip())]
        if not content or not isinstance(content[0], Tag) \
                or content[0].name != 'code':
            continue
        literal = content[0].string
        if literal and literal.strip():
            literals.append(literal.strip())
    return literals
