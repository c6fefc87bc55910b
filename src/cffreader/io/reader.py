"""Reader for CITATION.cff files and streams.

A read either returns a fully validated :class:`CitationMetadata` or raises
exactly one of :class:`FileNameError`, :class:`DataValidationError` or
:class:`ReadFailureError`. Nothing partially built is ever returned.
"""

import os
import re
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

import yaml
from pydantic import ValidationError

from ..core.defined_values import CFF_FILE_NAME
from ..core.errors import CFFError, DataValidationError, FileNameError, ReadFailureError
from ..core.models import CitationMetadata
from ..utils.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]
Stream = Union[bytes, bytearray, BinaryIO]

STREAM_SOURCE = "<stream>"


class CFFLoader(yaml.SafeLoader):
    """SafeLoader that resolves only ``true``/``false`` as booleans.

    YAML 1.1 also reads ``yes``, ``no``, ``on`` and ``off`` as booleans, which
    turns the Norwegian language code ``no`` or a title like ``yes`` into
    ``False``/``True``. Here they stay text.
    """


CFFLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
CFFLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


class ReaderState(Enum):
    """Where a reader is in its current (or last) read."""
    UNOPENED = "unopened"
    PARSING = "parsing"
    VALIDATED = "validated"
    FAILED = "failed"


class CitationReader:
    """
    Read CFF documents into :class:`CitationMetadata`.

    A reader holds no state besides the outcome of its last read, so
    independent instances may be used from different threads.

    Example:
        >>> reader = CitationReader()
        >>> citation = reader.read_from_file("CITATION.cff")
        >>> [p.family_names for p in citation.person_authors]
    """

    def __init__(self) -> None:
        self.state = ReaderState.UNOPENED
        self.last_error: Optional[CFFError] = None
        self._source = STREAM_SOURCE

    def read_from_file(self, path: PathLike) -> CitationMetadata:
        """Read the file at ``path``, which must be named ``CITATION.cff``."""
        file_path = Path(path)
        self._source = str(file_path)
        if file_path.name != CFF_FILE_NAME:
            error = FileNameError(
                f"File name of CFF file must be '{CFF_FILE_NAME}' (is '{file_path.name}')!",
                value=file_path.name,
            )
            self._fail(error)
            raise error
        self.state = ReaderState.PARSING
        logger.debug(f"Reading CFF file {file_path}")
        try:
            with open(file_path, "rb") as f:
                return self._read(f)
        except OSError as e:
            error = ReadFailureError(f"Could not read CFF file '{file_path}': {e}", source=e)
            self._fail(error)
            raise error from e

    def read_from_stream(self, stream: Stream) -> CitationMetadata:
        """Read a CFF document from bytes or a binary stream."""
        self._source = STREAM_SOURCE
        self.state = ReaderState.PARSING
        logger.debug("Reading CFF stream")
        if isinstance(stream, (bytes, bytearray)):
            return self._read(bytes(stream))
        return self._read(stream)

    def _read(self, source: Union[bytes, BinaryIO]) -> CitationMetadata:
        document = self._parse(source)
        try:
            citation = CitationMetadata.from_cff(document)
        except DataValidationError as e:
            self._fail(e)
            raise
        except ValidationError as e:
            error = ReadFailureError(f"CFF document has an unexpected structure: {e}", source=e)
            self._fail(error)
            raise error from e
        self.state = ReaderState.VALIDATED
        self.last_error = None
        logger.debug(f"Read citation metadata for '{citation.title}' {citation.version} from {self._source}")
        return citation

    def _parse(self, source: Union[bytes, BinaryIO]) -> Any:
        try:
            document = yaml.load(source, Loader=CFFLoader)
        except yaml.YAMLError as e:
            error = ReadFailureError(f"CFF document is not valid YAML: {e}", source=e)
            self._fail(error)
            raise error from e
        except (OSError, ValueError, TypeError) as e:
            # e.g. a closed stream
            error = ReadFailureError(f"Could not parse CFF document from {self._source}: {e}", source=e)
            self._fail(error)
            raise error from e
        if not isinstance(document, dict):
            error = ReadFailureError(
                f"CFF document must be a mapping of keys (got {type(document).__name__})"
            )
            self._fail(error)
            raise error
        return document

    def _fail(self, error: CFFError) -> None:
        self.state = ReaderState.FAILED
        self.last_error = error
        logger.warning(
            f"CFF read failed ({type(error).__name__}): {error}",
            extra={"cff_source": self._source, "error_kind": error.kind.value, "cff_key": error.field},
        )


def read_from_file(path: PathLike) -> CitationMetadata:
    """Read a ``CITATION.cff`` file with a fresh :class:`CitationReader`."""
    return CitationReader().read_from_file(path)


def read_from_stream(stream: Stream) -> CitationMetadata:
    """Read a CFF document from bytes or a binary stream with a fresh reader."""
    return CitationReader().read_from_stream(stream)
