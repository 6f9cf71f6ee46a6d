"""Factory for creating service instances."""

from ts2js.run_config import ConversionConfig
from ts2js.services.esbuild_engine import EsbuildTransformEngine
from ts2js.services.interfaces import FileSystem, TransformEngine
from ts2js.services.pathlib_file_system import PathlibFileSystem


class ServiceFactory:
    """Factory for creating service instances."""

    @staticmethod
    def create_transform_engine(config: ConversionConfig | None = None) -> TransformEngine:
        """Create the esbuild-backed engine. Raises EngineNotFoundError."""
        if config is None:
            config = ConversionConfig.from_env()
        return EsbuildTransformEngine(command=config.engine_command, timeout=config.engine_timeout)

    @staticmethod
    def create_file_system() -> FileSystem:
        """Create file system with default implementation."""
        return PathlibFileSystem()
