"""Conversion orchestration for single files and directory trees."""

import logging
import time
from pathlib import Path

from ts2js.components import DirectoryWalker, FileConverter
from ts2js.exceptions import TargetNotFoundError
from ts2js.run_config import ConversionConfig
from ts2js.services.interfaces import FileSystem, TransformEngine
from ts2js.types import ConversionResult, ConversionStats

LOGGER = logging.getLogger(__name__)


class ConversionProcessor:
    """Orchestrates conversions using separate components."""

    def __init__(
        self,
        engine: TransformEngine,
        file_system: FileSystem,
        config: ConversionConfig | None = None,
    ) -> None:
        """Initialize the processor with its component dependencies.

        Args:
            engine: Transform engine used for every file
            file_system: Service for file reads, writes, deletes and listings
            config: Conversion settings; read from the environment when omitted
        """
        self.config = config if config is not None else ConversionConfig.from_env()
        self._file_system = file_system
        self._file_converter = FileConverter(engine, file_system, self.config)
        self._directory_walker = DirectoryWalker(self._file_converter, file_system, self.config)

        LOGGER.debug("Conversion configuration: %s", self.config.to_dict())

    def convert_file(self, file_path: str | Path) -> ConversionResult | None:
        """Convert a single named file.

        Args:
            file_path: Path to the source file

        Returns:
            ConversionResult, or None when the extension is unsupported

        Raises:
            TargetNotFoundError: If nothing exists at file_path
        """
        path = Path(file_path)
        if not self._file_system.exists(path):
            raise TargetNotFoundError(f"File not found: {path}")
        return self._file_converter.convert_file(path)

    def convert_directory(self, directory: str | Path) -> ConversionStats:
        """Main entry point for directory mode: walk the tree and convert every file found."""
        LOGGER.debug("Starting directory conversion: %s", directory)
        start = time.time()
        stats = self._directory_walker.convert_directory(directory)
        LOGGER.debug("Directory conversion took %.2f s", time.time() - start)
        return stats
