from .code_extractor import CodeExtractor


class ExtractorFactory:
    """Factory for creating extractor instances (Factory pattern).

    Keys are extractor kind ids ("Java", "CSS", ...). Registration order is
    preserved and becomes the default orchestration order.
    """

    _registry: dict[str, type[CodeExtractor]] = {}

    @classmethod
    def register(cls, extractor_class: type[CodeExtractor], key: str | None = None) -> None:
        """
        Register an extractor implementation.

        Args:
            extractor_class: The extractor class to register
            key: Identifier override; defaults to the class's KIND_ID
        """
        cls._registry[key or extractor_class.KIND_ID] = extractor_class

    @classmethod
    def create(cls, extractor_key: str) -> CodeExtractor:
        """
        Create an extractor instance.

        Args:
            extractor_key: Registered extractor identifier

        Returns:
            Instantiated CodeExtractor

        Raises:
            KeyError: If extractor_key is not registered
        """
        if extractor_key not in cls._registry:
            available = ", ".join(cls._registry.keys())
            raise KeyError(
                f"Extractor: '{extractor_key}' not found. "
                f"Available extractors: {available}"
            )
        return cls._registry[extractor_key]()

    @classmethod
    def create_all(cls, extractor_keys: list[str] | None = None) -> list[CodeExtractor]:
        """
        Create extractors in the given order, or every registered one.

        Raises:
            KeyError: If any key is not registered
        """
        keys = extractor_keys if extractor_keys is not None else cls.list_extractors()
        return [cls.create(key) for key in keys]

    @classmethod
    def list_extractors(cls) -> list[str]:
        """
        Get list of registered extractor keys, in registration order.
        """
        return list(cls._registry.keys())

    @classmethod
    def is_registered(cls, extractor_key: str) -> bool:
        return extractor_key in cls._registry

    @classmethod
    def snapshot(cls) -> dict[str, type[CodeExtractor]]:
        """Capture current registry state for later restoration."""
        return dict(cls._registry)

    @classmethod
    def restore(cls, snapshot: dict[str, type[CodeExtractor]]) -> None:
        """Restore registry to a previously captured state."""
        cls._registry.clear()
        cls._registry.update(snapshot)
