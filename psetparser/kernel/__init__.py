"""Kernel module of psetparser

Holds the exception hierarchy, logging and the enumeration cache used by all
parsing steps.
"""


class PsetParseError(Exception):
    """Base class for all failures while parsing a definition document.

    Context identifiers (file path, row index, property name) can be attached
    while the exception travels upwards. They are kept in ``context`` and are
    part of the message.
    """

    def __init__(self, message: str = '', **context):
        super().__init__(message)
        self.message = message
        self.context = dict(context)

    def with_context(self, **context) -> 'PsetParseError':
        """Attach further context without overwriting inner context."""
        for key, value in context.items():
            self.context.setdefault(key, value)
        return self

    def __str__(self):
        if not self.context:
            return self.message
        ctx = ', '.join(f"{key}={value!r}"
                        for key, value in self.context.items())
        return f"{self.message} [{ctx}]"


class StructuralNotFound(PsetParseError):
    """A mandatory structural element is missing in the document."""


class NameNotFound(StructuralNotFound):
    """No Pset_ or Qto_ name in the <h1> heading."""


class VersionNotFound(StructuralNotFound):
    """No version tag in the <header> block."""


class ApplicableEntitiesNotFound(StructuralNotFound):
    """The 'Applicable entities' section is missing."""


class PropertiesTableNotFound(StructuralNotFound):
    """The 'Properties' section or its <table> is missing."""


class MalformedRow(PsetParseError):
    """A property row has an unexpected number of cells."""


class ReferenceNotFound(PsetParseError):
    """A cell does not contain the expected link reference."""


class UnknownPropertyKind(PsetParseError):
    """Property kind label is not one of the known IfcProperty types."""

    def __init__(self, label: str, **context):
        super().__init__(f"Unknown property type: {label}", **context)
        self.label = label


class UnrecognizedVersion(PsetParseError):
    """Version text does not belong to a known IFC version family."""

    def __init__(self, version: str, **context):
        super().__init__(f"Unrecognized IFC version: {version}", **context)
        self.version = version


class EnumerationError(PsetParseError):
    """Resolving an enumerated property type failed."""


class EnumerationFileMissing(EnumerationError):
    """The PEnum_ file for an enumeration does not exist."""


class EmptyEnumeration(EnumerationError):
    """The PEnum_ file exists but holds no enumeration literals."""


class DocumentReadError(PsetParseError):
    """Reading a document or enumeration file from disk failed."""


class DocumentParseError(PsetParseError):
    """Raised by the session if a single document can not be parsed.

    The original exception is available as ``__cause__``.
    """
