"""File writer for conversion output."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union
from ..types import ConversionError, ErrorType


class FileWriter:
    """
    Writes converted documents to disk.

    The output is written to a temporary sibling file first and moved into
    place, so a failed write never leaves a truncated document behind.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the file writer.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def write_output(self, text: str, output_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Write converted text to a file.

        Args:
            text: Converted document
            output_path: Destination file path

        Returns:
            Dictionary with file information

        Raises:
            ConversionError: If writing fails
        """
        path = Path(output_path)
        self._ensure_directory_exists(path.parent)
        temp_path = path.with_name(f".{path.name}.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(temp_path, path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise ConversionError(
                f"Failed to write {path}: {e}",
                ErrorType.ENCODE,
                context={"path": str(path)}
            ) from e

        file_size = path.stat().st_size
        self.logger.info(f"Wrote {file_size} bytes to {path}")

        return {
            "filename": path.name,
            "path": str(path.absolute()),
            "size": file_size,
        }

    def _ensure_directory_exists(self, directory_path: Path) -> None:
        """
        Ensure that a directory exists, creating it if necessary.

        Raises:
            ConversionError: If directory creation fails or it is not writable
        """
        try:
            directory_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConversionError(
                f"Failed to create directory {directory_path}: {e}",
                ErrorType.ENCODE
            ) from e

        if not os.access(directory_path, os.W_OK):
            raise ConversionError(
                f"Directory {directory_path} is not writable",
                ErrorType.ENCODE
            )
