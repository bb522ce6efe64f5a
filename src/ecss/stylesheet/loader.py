"""Document loading: bytes on disk to :class:`StyleSheetDocument`.

The core never performs I/O itself; this loader is the collaborator a host
(or the CLI) uses to turn a named source into a document.  Plain ``.css``
is decoded as UTF-8 and parsed directly.  Richer dialects are supported by
registering a preprocessor for their extension that compiles them down to
plain style sheet text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from ecss.config import EcssConfig
from ecss.errors import StyleSheetLoaderError
from ecss.stylesheet.model import StyleSheetDocument

logger = logging.getLogger(__name__)

Preprocessor = Callable[[str, str], str]
"""``(source_text, path) -> css_text``."""


class StyleSheetLoader:
    """Maps file extensions to decoders and parses the result."""

    def __init__(self, config: EcssConfig | None = None) -> None:
        self.config = config or EcssConfig()
        self._preprocessors: dict[str, Preprocessor] = {}

    def register_preprocessor(self, extension: str, preprocessor: Preprocessor) -> None:
        """Compile sources ending in ``.<extension>`` with *preprocessor* before parsing."""
        self._preprocessors[extension.lstrip(".").lower()] = preprocessor

    def extensions(self) -> list[str]:
        return [*self.config.extensions, *self._preprocessors]

    def supports(self, path: str | Path) -> bool:
        return _extension(path) in self.extensions()

    def load_bytes(self, path: str, data: bytes) -> StyleSheetDocument:
        """Decode and parse *data* as if it had been read from *path*."""
        extension = _extension(path)
        if extension not in self.extensions():
            raise StyleSheetLoaderError(f"Unsupported style sheet extension: .{extension}", path=path)
        try:
            content = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StyleSheetLoaderError(f"Invalid file format: {e}", path=path, cause=e) from e
        preprocessor = self._preprocessors.get(extension)
        if preprocessor is not None and extension not in self.config.extensions:
            try:
                content = preprocessor(content, path)
            except Exception as e:
                raise StyleSheetLoaderError(
                    f"Could not preprocess {path}: {e}", path=path, cause=e
                ) from e
        document = StyleSheetDocument.parse(path, content)
        logger.info(
            "Loaded style sheet %s (%d rule(s), %d diagnostic(s))",
            path,
            len(document.rules),
            len(document.diagnostics),
        )
        return document

    def load(self, path: str | Path) -> StyleSheetDocument:
        """Read *path* from disk and parse it."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise StyleSheetLoaderError(f"File not found: {path}", path=str(path), cause=e) from e
        return self.load_bytes(str(path), data)


def _extension(path: str | Path) -> str:
    return Path(path).suffix.lstrip(".").lower()
