"""psetparser main module.

This tool reads property and quantity set definitions from the html pages
of the IFC documentation.

Usage:
    psetparser parse <file>... [--qto] [-c <config>] [--json] [--skip-failed] [-l <log_dir>]
    psetparser --help
    psetparser --version

Options:
    parse                       Parse the given definition pages
    -h --help                   Show this screen.
    -v --version                Show version.
    --qto                       Parse pages as quantity sets (Qto_)
    -c <config> --config <config>  Config file with a [ParserSettings] section
    --json                      Print the definitions as json
    --skip-failed               Skip pages that can't be parsed
    -l <log_dir> --log <log_dir>  Write log files to this folder
"""
import json
import sys
from importlib.metadata import version

import docopt

from psetparser.elements.pset_definition import SchemaDefinition, \
    data_type_to_dict, schema_to_dict
from psetparser.kernel import DocumentParseError, log
from psetparser.parser import ParserSession
from psetparser.settings import ParserSettings
from psetparser.utilities.types import ItemKind


def get_version():
    """Get package version"""
    try:
        return version("psetparser")
    except Exception:
        return "unknown"


def format_schema(schema: SchemaDefinition) -> str:
    """Human readable summary of a definition."""
    lines = [f"{schema.name} ({schema.schema_version})"]
    applicable = ', '.join(schema.applicable_classes) or '-'
    lines.append(f"  applicable: {applicable}")
    if schema.predefined_type_hint:
        lines.append(f"  predefined type: {schema.predefined_type_hint}")
    for entry in sorted(schema.properties, key=lambda e: e.name):
        data = data_type_to_dict(entry.data_type)
        kind = data.pop('kind')
        details = ', '.join(
            f"{key}={value}" for key, value in data.items())
        lines.append(f"  {entry.name}: {kind} [{details}]")
    return '\n'.join(lines)


def commandline_interface(argv=None) -> int:
    """User interface"""
    args = docopt.docopt(__doc__, argv=argv, version=get_version())

    log.initial_logging_setup()
    if args.get('--log'):
        log.report_logging_setup(args['--log'])

    settings = ParserSettings()
    if args.get('--config'):
        settings.load_config(args['--config'])
    if args.get('--qto'):
        settings.item_kind = ItemKind.quantity_set
    if args.get('--skip-failed'):
        settings.skip_failed_documents = True

    session = ParserSession(settings=settings)
    try:
        schemas = session.parse_files(args['<file>'])
    except DocumentParseError as ex:
        print(ex, file=sys.stderr)
        return 1

    if args.get('--json'):
        print(json.dumps([schema_to_dict(schema)
                          for schema in schemas.values()], indent=2))
    else:
        for schema in schemas.values():
            print(format_schema(schema))
    return 0 if not session.failed else 2


if __name__ == '__main__':
    sys.exit(commandline_interface())
