# domain/core/syspro_object.py
"""
Generic representation of a resource returned by the SYSPRO API.

Every decoded response becomes a SysproObject (or a registered variant of
it): an insertion-ordered bag of attributes that compares by value, copies
deeply, and projects back to plain JSON-ready data. The object performs no
I/O; the transport layer builds instances with construct_from() or
convert_to_syspro_object() and reads attributes back off them.
"""
import json
import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from utils.constants import ID_KEY, JSON_INDENT, OBJECT_TYPE_KEY
from utils.options import RequestOptions, normalize_opts
from utils.registry import ObjectRegistry

logger = logging.getLogger(__name__)


class SysproObject:
    """
    Dynamically shaped attribute container for a SYSPRO response.

    Attributes are reachable both as items (``obj["name"]``) and as
    attributes (``obj.name``). Names that collide with methods (``keys``,
    ``values``, ``items``, ``get``) are only reachable as items.

    Besides the values, the object keeps:
    - the request options it was fetched with
    - the keys assigned locally since the last refresh ("unsaved")
    - the keys dropped by the last full refresh ("transient")
    None of these take part in equality.
    """

    def __init__(self, id: Optional[Any] = None, opts=None):
        self._opts: RequestOptions = normalize_opts(opts)
        self._values: Dict[str, Any] = {}
        self._unsaved_values = set()
        self._transient_values = set()

        if id is not None:
            self._values[ID_KEY] = id

    @classmethod
    def construct_from(cls, values: Mapping[str, Any], opts=None) -> "SysproObject":
        """
        Build an instance of this class from already known data.

        This is the factory every variant shares; no request is made.
        """
        return cls(values.get(ID_KEY), opts).refresh_from(values, opts)

    def refresh_from(self, values: Mapping[str, Any], opts=None, partial: bool = False) -> "SysproObject":
        """
        Replace the object's state with values received from the server.

        Args:
            values: Decoded attributes
            opts: Options to merge over the current ones
            partial: When False, keys absent from values are removed and
                remembered as transient

        Returns:
            The object itself
        """
        self._opts = self._opts.merge(normalize_opts(opts))

        removed = set() if partial else set(self._values) - set(values)
        if removed:
            logger.debug(f"{type(self).__name__} refresh dropped: {', '.join(sorted(map(str, removed)))}")
        for key in removed:
            del self._values[key]
            self._transient_values.add(key)
            self._unsaved_values.discard(key)

        for key, value in values.items():
            self._values[key] = convert_to_syspro_object(value, self._opts)
            self._transient_values.discard(key)
            self._unsaved_values.discard(key)

        return self

    @property
    def opts(self) -> RequestOptions:
        return self._opts

    @property
    def unsaved_values(self) -> frozenset:
        """Keys assigned locally since the object was last in sync."""
        return frozenset(self._unsaved_values)

    @property
    def transient_values(self) -> frozenset:
        """Keys wiped by the last full refresh."""
        return frozenset(self._transient_values)

    def mark_clean(self) -> None:
        """Forget all local assignments, e.g. after a successful save."""
        self._unsaved_values.clear()

    # Mapping protocol

    def __getitem__(self, key: str) -> Any:
        try:
            return self._values[key]
        except KeyError:
            if key in self._transient_values:
                raise KeyError(
                    f"{key!r}. HINT: The {key!r} attribute was set in the past, however it was "
                    f"then wiped when refreshing the object with the result returned by the "
                    f"SYSPRO API. The attributes currently available on this object are: "
                    f"{', '.join(map(str, self._values))}"
                ) from None
            raise

    def __setitem__(self, key: str, value: Any) -> None:
        # Intent is tracked, not the delta: same value still marks the key
        self._values[key] = convert_to_syspro_object(value, self._opts)
        self._unsaved_values.add(key)
        self._transient_values.discard(key)

    def __delitem__(self, key: str) -> None:
        del self._values[key]
        self._unsaved_values.discard(key)

    def __contains__(self, key) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def keys(self) -> List[str]:
        return list(self._values.keys())

    def values(self) -> List[Any]:
        return list(self._values.values())

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._values.items())

    # Attribute access

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(*e.args) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith('_') or isinstance(getattr(type(self), name, None), property):
            super().__setattr__(name, value)
        else:
            self[name] = value

    def __delattr__(self, name: str) -> None:
        if name.startswith('_') or isinstance(getattr(type(self), name, None), property):
            super().__delattr__(name)
            return
        try:
            del self[name]
        except KeyError as e:
            raise AttributeError(*e.args) from None

    def __dir__(self):
        return list(super().__dir__()) + [k for k in self._values if isinstance(k, str) and k.isidentifier()]

    # Value semantics

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SysproObject):
            return False
        return self._values == other._values

    # Mutable, compared by value
    __hash__ = None

    def __copy__(self) -> "SysproObject":
        copied = type(self)(None, self._opts)
        copied._values.update(self._values)
        copied._unsaved_values.update(self._unsaved_values)
        copied._transient_values.update(self._transient_values)
        return copied

    def __deepcopy__(self, memo) -> "SysproObject":
        return deep_copy(self)

    # Projection

    def to_dict(self) -> Dict[str, Any]:
        """Recursively convert to plain dicts, lists and scalars."""
        return {key: to_plain(value) for key, value in self._values.items()}

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), indent=JSON_INDENT, default=str)

    def __repr__(self) -> str:
        id_value = self._values.get(ID_KEY)
        id_string = f" id={id_value}" if id_value is not None else ""
        return f"<{type(self).__name__}{id_string} at {hex(id(self))}> JSON: {self}"


# Variants register here under the name found in a response's "object" key
OBJECT_CLASSES = ObjectRegistry(SysproObject)
register_object = OBJECT_CLASSES.register_object


def to_plain(value: Any) -> Any:
    """Project an attribute value onto plain JSON-ready data. Idempotent."""
    if isinstance(value, SysproObject):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


def deep_copy(obj: Any) -> Any:
    """
    Produce a deep copy of an attribute value.

    Lists, tuples, dicts and SysproObjects are copied recursively; any
    other value is treated as an immutable scalar and returned as is.
    SysproObjects are rebuilt through their own class's construct_from()
    with only the copyable request options.
    """
    if isinstance(obj, list):
        return [deep_copy(item) for item in obj]
    if isinstance(obj, tuple):
        return tuple(deep_copy(item) for item in obj)
    if isinstance(obj, dict):
        return {key: deep_copy(value) for key, value in obj.items()}
    if isinstance(obj, SysproObject):
        return type(obj).construct_from(deep_copy(obj._values), obj._opts.copyable())
    return obj


def convert_to_syspro_object(resp: Any, opts=None) -> Any:
    """
    Turn decoded JSON into SysproObjects.

    Mappings become instances of the class registered for their "object"
    name, falling back to SysproObject. Lists are converted element-wise.
    """
    if isinstance(resp, list):
        return [convert_to_syspro_object(item, opts) for item in resp]
    if isinstance(resp, Mapping):
        object_name = resp.get(OBJECT_TYPE_KEY)
        klass = SysproObject
        if isinstance(object_name, str):
            klass = OBJECT_CLASSES.get(object_name, SysproObject)
        return klass.construct_from(resp, opts)
    return resp
