# utils/registry.py
import logging
from typing import Callable, Dict, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ObjectRegistry:
    """Maps the object name found in a decoded response to the class representing it"""

    def __init__(self, base: type):
        self.base = base
        self.classes: Dict[str, type] = {}

    def register(self, name: str, cls: type) -> type:
        """Register a class under an object name, replacing any earlier registration"""
        if not (isinstance(cls, type) and issubclass(cls, self.base)):
            raise TypeError(f"{cls!r} is not a subclass of {self.base.__name__}")

        previous = self.classes.get(name)
        if previous is not None and previous is not cls:
            logger.debug(f"Replacing {previous.__name__} with {cls.__name__} for object '{name}'")

        self.classes[name] = cls
        return cls

    def register_object(self, name: str) -> Callable[[Type[T]], Type[T]]:
        """Class decorator form of register()"""
        def decorator(cls: Type[T]) -> Type[T]:
            self.register(name, cls)
            return cls
        return decorator

    def unregister(self, name: str) -> None:
        """Forget a registration, if any"""
        self.classes.pop(name, None)

    def get(self, name: Optional[str], default: Optional[type] = None) -> Optional[type]:
        """Get the class for an object name"""
        if name is None:
            return default
        return self.classes.get(name, default)

    def __contains__(self, name) -> bool:
        return name in self.classes
