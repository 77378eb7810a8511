import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

test_rsrc_path = Path(__file__).parent.parent / 'resources'
lexical_path = test_rsrc_path / 'lexical'


def link(label: str) -> str:
    return f'<a href="{label}.htm">{label}</a>'


def heading(number: str, title: str, level: int = 2) -> str:
    anchor_id = f"{number}-{title.replace(' ', '-')}"
    return (f'<h{level}><a class="anchor" id="{anchor_id}"></a> {number} '
            f'{title} <a class="link" href="#{anchor_id}">&para;</a>'
            f'</h{level}>')


class PageHelper:
    """Builds documentation pages in the layout of the IFC documentation.

    Created enumeration files are written to a temporary folder that is
    removed by reset().
    """

    def __init__(self):
        self._temp_dir = None

    @property
    def directory(self) -> Path:
        if self._temp_dir is None:
            self._temp_dir = tempfile.TemporaryDirectory(
                prefix='psetparser_test')
        return Path(self._temp_dir.name)

    def reset(self) -> None:
        if self._temp_dir is not None:
            self._temp_dir.cleanup()
            self._temp_dir = None

    @staticmethod
    def pset_row(name: str, property_type: str, *data_types: str,
                 description: str = 'Some description.') -> str:
        data_type = '/'.join(link(data_type) for data_type in data_types)
        return (f'<tr><td>{name}</td><td>{link(property_type)}</td>'
                f'<td>{data_type}</td><td>{description}</td></tr>')

    @staticmethod
    def qto_row(name: str, quantity_type: str,
                description: str = 'Some description.') -> str:
        return (f'<tr><td>{name}</td><td>{link(quantity_type)}</td>'
                f'<td>{description}</td></tr>')

    @staticmethod
    def entity_item(entity: str, predefined_type: str = None) -> str:
        suffix = f'/{predefined_type}' if predefined_type else ''
        return f'<li>{link(entity)}{suffix}</li>'

    @staticmethod
    def page(name: str = 'Pset_WallCommon',
             version: Optional[str] = 'IFC4',
             entities: Optional[Iterable[str]] = ('IfcWall',),
             rows: Iterable[str] = (),
             with_properties: bool = True,
             with_table: bool = True,
             with_tbody: bool = True) -> str:
        """Markup of a definition page.

        Args:
            name: set name in the h1 heading
            version: version tag in the header, None for no header
            entities: list items of the applicable entities section, plain
                entity names are turned into items, None for no section
            rows: rows of the properties table
            with_properties: add the properties section
            with_table: add the table to the properties section
            with_tbody: wrap the rows in <tbody>
        """
        parts: List[str] = ['<html><body>']
        if version is not None:
            parts.append(f'<header><p>IFC 4.0.2.1 ({version})</p></header>')
        parts.append('<main><div class="content">')
        parts.append(f'<h1>6.1.4.23 {name}</h1>')
        parts.append(heading('6.1.4.23.1', 'Semantic definition'))
        parts.append('<p>Common properties.</p>')
        if entities is not None:
            parts.append(heading('6.1.4.23.2', 'Applicable entities'))
            items = [entity if entity.startswith('<li>')
                     else PageHelper.entity_item(entity)
                     for entity in entities]
            parts.append('<ul>\n' + '\n'.join(items) + '\n</ul>')
        if with_properties:
            parts.append(heading('6.1.4.23.3', 'Properties'))
            if with_table:
                body = '\n'.join(rows)
                if with_tbody:
                    body = f'<tbody>\n{body}\n</tbody>'
                parts.append(
                    '<table>\n<thead><tr><th>Name</th><th>Property Type</th>'
                    '<th>Data Type</th><th>Description</th></tr></thead>\n'
                    f'{body}\n</table>')
            else:
                parts.append('<p>No properties.</p>')
        parts.append(heading('6.1.4.23.4', 'Changelog'))
        parts.append('</div></main></body></html>')
        return '\n'.join(parts)

    def write_enum(self, enum_name: str, literals: Iterable[str],
                   extension: str = '.htm') -> Path:
        """Writes a PEnum_ page with the literals to the temp folder."""
        rows = '\n'.join(f'<tr><td><code>{literal}</code></td><td>'
                         f'Description of {literal}.</td></tr>'
                         for literal in literals)
        content = (
            '<html><body><header><p>IFC 4.0.2.1 (IFC4)</p></header>'
            f'<h1>6.1.5.1 {enum_name}</h1>'
            f'{heading("6.1.5.1.1", "Type values")}'
            '<table><thead><tr><th>Type</th><th>Description</th></tr></thead>'
            f'<tbody>\n{rows}\n</tbody></table></body></html>')
        path = self.directory / f'{enum_name}{extension}'
        path.write_text(content, encoding='utf-8')
        return path

    def write_page(self, file_name: str, content: str) -> Path:
        path = self.directory / file_name
        path.write_text(content, encoding='utf-8')
        return path
