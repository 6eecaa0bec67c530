"""
File-backed host.

Plays the host's role for a document stored on disk: supplies the file's
text to a sync controller and writes every emitted document back.
"""

import logging
from pathlib import Path

from slashform.core.codec import DocumentCodec
from slashform.core.controller import ControllerStatus, SyncController
from slashform.core.registry import SchemaRegistry

logger = logging.getLogger(__name__)


class FileHost:
    """
    Host adapter for one document file.

    Args:
        path: Document file; a missing file is treated as an empty document
        registry: Schema describing the document
        codec: Document codec
        autosave: Write each emission immediately; when False, emissions are
            held until save() so a batch of edits writes the file once
    """

    def __init__(
        self,
        path: Path,
        registry: SchemaRegistry,
        codec: DocumentCodec | None = None,
        autosave: bool = True,
    ):
        self.path = path
        self.autosave = autosave
        self.controller = SyncController(registry, emit=self._receive, codec=codec)
        self._pending: str | None = None

    @property
    def dirty(self) -> bool:
        """Check if an emitted document has not been written yet."""
        return self._pending is not None

    def open(self) -> ControllerStatus:
        """Read the file and hand its text to the controller."""
        if self.path.exists():
            text = self.path.read_text(encoding="utf-8")
        else:
            logger.debug(f"{self.path} does not exist, starting from an empty document")
            text = ""
        return self.controller.load_document(text, source=str(self.path))

    def save(self) -> bool:
        """
        Write the pending document, if any.

        Returns:
            True if the file was written
        """
        if self._pending is None:
            return False

        self.path.write_text(self._pending, encoding="utf-8")
        logger.info(f"Wrote {self.path}")
        self._pending = None
        return True

    def _receive(self, text: str) -> None:
        self._pending = text
        if self.autosave:
            self.save()
