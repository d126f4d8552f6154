"""Layered key/value store underneath the resolved configuration.

Layers are flat ``dict[str, Any]`` mappings keyed by dotted strings and
are searched highest precedence first. A ``runtime`` layer always sits on
top and receives every :meth:`LayeredStore.set_property` call, so the
layers loaded from disk are never mutated.

Precedence chain (highest to lowest):
  1. runtime   — values set programmatically
  2. project   — ``sitebake.toml`` discovered via walk-up
  3. defaults  — packaged ``defaults.toml``
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from sitebake.errors import ConversionError

RUNTIME_LAYER = "runtime"

_TRUE = frozenset({"true", "yes", "on", "1"})
_FALSE = frozenset({"false", "no", "off", "0"})


def flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested tables into dotted keys.

    ``{"template": {"post": {"file": "post.ftl"}}}`` becomes
    ``{"template.post.file": "post.ftl"}``. Keys that already contain dots
    (quoted TOML keys) are kept as they are.
    """
    flat: dict[str, Any] = {}
    for key, value in data.items():
        full = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten(value, full))
        else:
            flat[full] = value
    return flat


class LayeredStore:
    """Precedence-ordered key/value configuration store.

    Attributes:
        layer_names: Layer names, highest precedence first.
    """

    def __init__(self, layers: list[tuple[str, dict[str, Any]]] | None = None) -> None:
        self._layers: list[tuple[str, dict[str, Any]]] = [(RUNTIME_LAYER, {})]
        for name, values in layers or []:
            self._layers.append((name, dict(values)))

    @classmethod
    def from_mappings(cls, *layers: tuple[str, Mapping[str, Any]]) -> LayeredStore:
        """Build a store from ``(name, mapping)`` pairs, highest precedence first.

        Nested mappings are flattened to dotted keys.
        """
        return cls([(name, flatten(values)) for name, values in layers])

    @property
    def layer_names(self) -> list[str]:
        return [name for name, _ in self._layers]

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def get_property(self, key: str) -> Any:
        """Return the raw value from the highest layer holding *key*, or None."""
        for _, values in self._layers:
            if key in values:
                return values[key]
        return None

    def set_property(self, key: str, value: Any) -> None:
        self._layers[0][1][key] = value

    def clear_property(self, key: str) -> None:
        """Remove a runtime override, revealing lower layers again."""
        self._layers[0][1].pop(key, None)

    def contains(self, key: str) -> bool:
        return any(key in values for _, values in self._layers)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def keys(self) -> Iterator[str]:
        """Yield every key once, walking layers from highest precedence down."""
        seen: set[str] = set()
        for _, values in self._layers:
            for key in values:
                if key not in seen:
                    seen.add(key)
                    yield key

    def subset(self, prefix: str) -> LayeredStore:
        """Return a detached store of the keys under ``prefix.``, prefix stripped.

        Layer order is preserved so the subset resolves values the same way.
        """
        head = f"{prefix}."
        layers = [
            (name, {key[len(head) :]: value for key, value in values.items() if key.startswith(head)})
            for name, values in self._layers[1:]
        ]
        sub = LayeredStore(layers)
        for key, value in self._layers[0][1].items():
            if key.startswith(head):
                sub.set_property(key[len(head) :], value)
        return sub

    def as_dict(self) -> dict[str, Any]:
        """Effective key/value view with precedence applied."""
        return {key: self.get_property(key) for key in self.keys()}

    # ------------------------------------------------------------------
    # Typed access
    # ------------------------------------------------------------------

    def get_string(self, key: str, default: str | None = None) -> str | None:
        value = self.get_property(key)
        if value is None:
            return default
        if isinstance(value, (list, tuple)):
            if not value:
                return default
            value = value[0]
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_boolean(self, key: str, default: bool = False) -> bool:
        value = self.get_property(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ConversionError(key, value, "boolean")

    def get_int(self, key: str, default: int | None = None) -> int | None:
        value = self.get_property(key)
        if value is None:
            return default
        if isinstance(value, bool):
            raise ConversionError(key, value, "integer")
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError as exc:
            raise ConversionError(key, value, "integer") from exc

    def get_long(self, key: str, default: int | None = None) -> int | None:
        """Alias of :meth:`get_int`; Python integers are unbounded."""
        return self.get_int(key, default)

    def get_string_array(self, key: str) -> list[str]:
        """Return a list value, splitting comma-separated strings."""
        value = self.get_property(key)
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        text = str(value)
        if not text.strip():
            return []
        return [part.strip() for part in text.split(",")]
