"""Cache for property enumerations.

Enumerated properties reference a PEnum_ page in the same folder. Many
property sets share the same enumerations (e.g. PEnum_Status), so every
enumeration file is parsed only once and the literal tuple is shared.
"""
import logging
import threading
from pathlib import Path
from typing import Dict, Tuple, Union

from psetparser.elements.pset_definition import EnumLiteral
from psetparser.kernel import EmptyEnumeration, EnumerationFileMissing
from psetparser.mapping import html2python

logger = logging.getLogger(__name__)


class EnumerationCache:
    """Insert only mapping from enumeration name to its literals.

    The first successful parse of an enumeration is kept for the lifetime of
    the cache and returned for all later lookups of that name, the backing
    file is not read again. Failed lookups are not cached.

    Loading is guarded by one lock per enumeration name, so parallel parsers
    sharing one cache do not read a file twice and do not block each other
    for different enumerations.

    Args:
        file_extension: extension of the enumeration files
    """

    def __init__(self, file_extension: str = '.htm'):
        self.file_extension = file_extension
        self._enums: Dict[str, Tuple[EnumLiteral, ...]] = {}
        self._lock = threading.Lock()
        self._name_locks: Dict[str, threading.Lock] = {}

    def __contains__(self, enum_name: str) -> bool:
        return enum_name in self._enums

    def __len__(self):
        return len(self._enums)

    def get(self, enum_name: str):
        """Cached literals or None, never reads a file."""
        return self._enums.get(enum_name)

    def enum_file_path(self, enum_name: str,
                       directory: Union[str, Path]) -> Path:
        return Path(directory) / f"{enum_name}{self.file_extension}"

    def resolve(self, enum_name: str, directory: Union[str, Path]) \
            -> Tuple[EnumLiteral, ...]:
        """Literals of an enumeration, loaded from file on first request.

        Args:
            enum_name: name of the enumeration, e.g. 'PEnum_CoreColoursEnum'
            directory: folder holding the enumeration file

        Returns:
            tuple of EnumLiteral in file order

        Raises:
            EnumerationFileMissing: no file for the enumeration
            EmptyEnumeration: the file holds no literals
            DocumentReadError: the file can't be read
        """
        literals = self._enums.get(enum_name)
        if literals is not None:
            return literals
        with self._lock:
            name_lock = self._name_locks.setdefault(
                enum_name, threading.Lock())
        with name_lock:
            # another thread may have loaded it meanwhile
            literals = self._enums.get(enum_name)
            if literals is None:
                literals = self.load(enum_name, directory)
                self._enums[enum_name] = literals
        return literals

    def load(self, enum_name: str, directory: Union[str, Path]) \
            -> Tuple[EnumLiteral, ...]:
        """Parses an enumeration file without using the cache."""
        enum_path = self.enum_file_path(enum_name, directory)
        if not enum_path.is_file():
            raise EnumerationFileMissing(
                f"Enumeration file not found: {enum_path}",
                enumeration=enum_name)
        logger.debug(f"Loading enumeration {enum_name} from {enum_path}")
        content = html2python.load_html(enum_path)
        literals = tuple(EnumLiteral(name)
                         for name in html2python.extract_enum_literals(content))
        if not literals:
            raise EmptyEnumeration(
                "No enumeration values found in file",
                enumeration=enum_name, path=str(enum_path))
        return literals

