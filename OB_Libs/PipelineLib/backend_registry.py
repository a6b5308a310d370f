"""
Resampler Backend Registry.

This module provides a centralized registry of resampling backends. A
backend is a callable ``(image, target_width, target_height) -> RasterImage``;
the resize node looks backends up by name so the production Pillow
bicubic filter and the exact nearest-neighbour test double are
interchangeable.

Classes:
    ResamplerRegistry: Registry for resampler backends

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_resamplers: Register all built-in backends
"""

from typing import Any, Callable, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

# Type alias for backend function
ResamplerFunction = Callable[[Any, int, int], Any]


class ResamplerRegistry:
    """
    Registry for resampler backends.

    Example:
        >>> registry = ResamplerRegistry()
        >>> registry.register("bicubic", resample_bicubic)
        >>> backend = registry.get("bicubic")
        >>> resized = backend(image, 100, 100)
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._backends: Dict[str, ResamplerFunction] = {}
        self._metadata: Dict[str, Dict[str, Any]] = {}

    def register(
        self,
        name: str,
        backend: ResamplerFunction,
        description: str = "",
        exact: bool = False,
    ) -> None:
        """
        Register a resampler backend.

        Args:
            name: Unique backend name (e.g., "bicubic")
            backend: Callable accepting (image, target_width, target_height)
            description: Human-readable description
            exact: True if the backend copies source pixels without interpolation

        Raises:
            ValueError: If name is empty or backend is not callable
            RuntimeError: If name is already registered
        """
        name = str(name).strip().lower()

        if not name:
            raise ValueError("backend name cannot be empty")

        if not callable(backend):
            raise ValueError(f"backend must be callable, got {type(backend)}")

        if name in self._backends:
            raise RuntimeError(
                f"Resampler '{name}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._backends[name] = backend
        self._metadata[name] = {
            "description": str(description),
            "exact": bool(exact),
        }

        logger.debug(f"Registered resampler backend: {name}")

    def unregister(self, name: str) -> bool:
        """
        Unregister a backend.

        Returns:
            True if unregistered, False if name was not registered
        """
        name = str(name).strip().lower()

        if name in self._backends:
            del self._backends[name]
            del self._metadata[name]
            logger.debug(f"Unregistered resampler backend: {name}")
            return True

        return False

    def get(self, name: str) -> ResamplerFunction:
        """
        Get a backend by name.

        Raises:
            KeyError: If name is not registered
        """
        name = str(name).strip().lower()

        if name not in self._backends:
            available = ", ".join(self.list_names())
            raise KeyError(
                f"No resampler registered under '{name}'. "
                f"Available backends: {available}"
            )

        return self._backends[name]

    def has(self, name: str) -> bool:
        return str(name).strip().lower() in self._backends

    def list_names(self) -> List[str]:
        """
        Get list of all registered backend names.

        Returns:
            Sorted list of names
        """
        return sorted(list(self._backends.keys()))

    def get_metadata(self, name: str) -> Dict[str, Any]:
        """
        Get metadata for a backend.

        Raises:
            KeyError: If name is not registered
        """
        name = str(name).strip().lower()

        if name not in self._metadata:
            raise KeyError(f"No metadata for resampler: {name}")

        return dict(self._metadata[name])


# Global singleton registry
_default_registry: Optional[ResamplerRegistry] = None


def get_default_registry() -> ResamplerRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in backends.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = ResamplerRegistry()
        register_default_resamplers(_default_registry)

    return _default_registry


def register_default_resamplers(registry: ResamplerRegistry) -> None:
    """
    Register all built-in resampler backends.

    This function registers:
    - bicubic: Pillow bicubic filter, per channel
    - nearest: exact nearest-neighbour copy (deterministic, for tests)

    Args:
        registry: The registry to register backends with
    """
    from OB_Libs.constants import RESAMPLER_BICUBIC, RESAMPLER_NEAREST
    from OB_Libs.NodesLib.resize_node import resample_bicubic, resample_nearest

    registry.register(
        name=RESAMPLER_BICUBIC,
        backend=resample_bicubic,
        description="Bicubic interpolation (Pillow), applied to each channel",
    )

    registry.register(
        name=RESAMPLER_NEAREST,
        backend=resample_nearest,
        description="Nearest-neighbour index copy (numpy), exact output",
        exact=True,
    )

    logger.debug("Registered default resampler backends")
