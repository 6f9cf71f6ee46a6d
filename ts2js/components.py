"""File conversion and directory traversal components."""

import logging
from collections.abc import Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from ts2js.exceptions import DirectoryScanError, FileConversionError
from ts2js.run_config import MARKUP_BY_CONTENT, MARKUP_MARKER, ConversionConfig
from ts2js.services.interfaces import DirectoryEntry, FileSystem, TransformEngine
from ts2js.types import ConversionResult, ConversionStats, ConversionTask

LOGGER = logging.getLogger(__name__)

CONVERSION_FAILED = "conversion failed"


class FileConverter:
    """Converts one source file: read, transform, write the new file, delete the original."""

    def __init__(self, engine: TransformEngine, file_system: FileSystem, config: ConversionConfig):
        """Initialize the file converter.

        Args:
            engine: Transform engine that strips types from source text
            file_system: Service for reading, writing and deleting files
            config: Extension map and markup detection settings
        """
        self._engine = engine
        self._file_system = file_system
        self.config = config

    def detect_task(self, path: str | Path) -> ConversionTask | None:
        """Return a task for a recognized extension, or None."""
        path = Path(path)
        extension = path.suffix.lower()
        if extension not in self.config.extension_map:
            return None
        return ConversionTask(input_path=path, extension=extension)

    def output_path_for(self, task: ConversionTask) -> Path:
        """Swap the recognized extension (in whatever case it was written) for its mapping."""
        name = task.input_path.name
        stem = name[: -len(task.extension)]
        return task.input_path.with_name(stem + self.config.extension_map[task.extension])

    def uses_markup(self, task: ConversionTask, source: str) -> bool:
        """Decide whether the engine should parse JSX.

        The content rule looks for a literal marker anywhere in the text, so it
        also fires on the marker inside comments or strings.
        """
        if self.config.markup_detection == MARKUP_BY_CONTENT:
            return MARKUP_MARKER in source
        return task.extension == ".tsx"

    def convert_file(self, path: str | Path) -> ConversionResult | None:
        """Convert a single file in place.

        Args:
            path: Path to the source file

        Returns:
            ConversionResult describing the outcome, or None if the extension
            is not recognized and the file was skipped
        """
        task = self.detect_task(path)
        if task is None:
            LOGGER.warning("Skipping unsupported file type: %s", path)
            return None

        input_path = task.input_path
        LOGGER.debug("Processing file: %s", input_path)

        try:
            source = self._file_system.read_text(input_path)
            converted = self._engine.transform(source, jsx=self.uses_markup(task, source))
            if not converted:
                LOGGER.error("Failed to process file %s: %s", input_path, CONVERSION_FAILED)
                return ConversionResult(input_path=input_path, succeeded=False, error_message=CONVERSION_FAILED)

            output_path = self.output_path_for(task)
            self._write_output(output_path, converted)
            # The original is removed only once the new file is fully written
            self._file_system.remove(input_path)

        except FileConversionError as error:
            LOGGER.error("Failed to process file %s: %s", input_path, error.reason)
            written = error.operation == "delete"
            return ConversionResult(
                input_path=input_path,
                succeeded=False,
                output_path=self.output_path_for(task) if written else None,
                error_message=f"{error.operation} failed: {error.reason}",
            )
        except Exception as error:
            error_msg = f"{type(error).__name__}: {error}"
            LOGGER.error("Failed to process file %s: %s", input_path, error_msg, exc_info=True)
            return ConversionResult(input_path=input_path, succeeded=False, error_message=error_msg)

        LOGGER.info("Successfully converted: %s → %s", input_path.name, output_path.name)
        return ConversionResult(input_path=input_path, succeeded=True, output_path=output_path)

    def _write_output(self, output_path: Path, content: str) -> None:
        existed = self._file_system.exists(output_path)
        if existed:
            LOGGER.warning("Overwriting existing file: %s", output_path)
        try:
            self._file_system.write_text(output_path, content)
        except FileConversionError:
            # Drop a partially written new file; an overwritten one is left as is
            if not existed and self._file_system.exists(output_path):
                try:
                    self._file_system.remove(output_path)
                except FileConversionError as cleanup_error:
                    LOGGER.warning("Could not remove partial output %s: %s", output_path, cleanup_error.reason)
            raise


class DirectoryWalker:
    """Walks a directory tree depth-first and converts every file found."""

    def __init__(self, converter: FileConverter, file_system: FileSystem, config: ConversionConfig):
        self._converter = converter
        self._file_system = file_system
        self.config = config

    def convert_directory(self, root: str | Path) -> ConversionStats:
        """Convert all files under root.

        Args:
            root: Directory to walk

        Returns:
            ConversionStats accumulated over the whole tree
        """
        root = Path(root)
        stats = ConversionStats()
        claimed: dict[Path, Path] = {}

        if self.config.workers > 1:
            LOGGER.debug("Converting with %d workers", self.config.workers)
            with ThreadPoolExecutor(max_workers=self.config.workers, thread_name_prefix="ts2js") as pool:
                pending: list[Future[ConversionResult | None] | ConversionResult] = []
                for path in self.iter_files(root, stats):
                    collision = self._claim_output(path, claimed)
                    if collision is None:
                        pending.append(pool.submit(self._converter.convert_file, path))
                    else:
                        pending.append(collision)
                for item in pending:
                    self._record(stats, item.result() if isinstance(item, Future) else item)
        else:
            for path in self.iter_files(root, stats):
                collision = self._claim_output(path, claimed)
                self._record(stats, collision if collision is not None else self._converter.convert_file(path))

        LOGGER.info(
            "Directory walk complete: %d succeeded, %d failed",
            stats.success_count,
            stats.failure_count,
        )
        return stats

    def iter_files(self, root: Path, stats: ConversionStats) -> Iterator[Path]:
        """Yield regular files under root in enumeration order.

        Uses an explicit stack instead of recursion. Directories that cannot be
        read are logged and counted once in ``stats.failure_count``.
        """
        entries = self._scan(root, stats)
        if entries is None:
            return

        stack: list[tuple[Iterator[DirectoryEntry], int]] = [(iter(entries), 0)]
        max_depth = self.config.max_depth

        while stack:
            iterator, depth = stack[-1]
            entry = next(iterator, None)
            if entry is None:
                stack.pop()
                continue

            if entry.kind == "directory":
                if self.config.is_ignored_dir(entry.name):
                    LOGGER.debug("Skipping ignored directory: %s", entry.path)
                    continue
                if max_depth is not None and depth + 1 > max_depth:
                    LOGGER.warning("Skipping directory beyond max depth %d: %s", max_depth, entry.path)
                    continue
                children = self._scan(entry.path, stats)
                if children is not None:
                    stack.append((iter(children), depth + 1))
            elif entry.kind == "file":
                yield entry.path
            else:
                LOGGER.debug("Skipping non-regular entry: %s", entry.path)

    def _claim_output(self, path: Path, claimed: dict[Path, Path]) -> ConversionResult | None:
        """Fail a file whose output path was already claimed by another file in this walk.

        On a case-sensitive file system ``a.ts`` and ``a.TS`` both map to ``a.js``;
        only the first one enumerated is converted.
        """
        task = self._converter.detect_task(path)
        if task is None:
            return None
        output_path = self._converter.output_path_for(task)
        owner = claimed.setdefault(output_path, path)
        if owner == path:
            return None
        message = f"output {output_path.name} collides with {owner.name}"
        LOGGER.error("Failed to process file %s: %s", path, message)
        return ConversionResult(input_path=path, succeeded=False, error_message=message)

    def _scan(self, directory: Path, stats: ConversionStats) -> list[DirectoryEntry] | None:
        try:
            return self._file_system.scan_dir(directory)
        except DirectoryScanError as error:
            LOGGER.error("Failed to read directory %s: %s", directory, error.reason)
            stats.record_directory_failure()
            return None

    @staticmethod
    def _record(stats: ConversionStats, result: ConversionResult | None) -> None:
        if result is not None:
            stats.record_result(result)
