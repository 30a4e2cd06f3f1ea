"""
Typed view of raw YAML data.

kickstart.yaml is read as plain dicts/lists/scalars; ``build_typed`` walks
the type hints of the configuration dataclasses and turns that tree into
instances, checking every value on the way. Errors carry the dotted key
path of the offending value (``build.statics.copy.0.files``).
"""

from __future__ import annotations

import dataclasses
import logging
import typing as t
from types import UnionType

from ..errors import KickstartUserError

_LOG = logging.getLogger(__name__)

KeyPath = t.Tuple[str, ...]

_T = t.TypeVar("_T")


class ConfigCoerceError(KickstartUserError, TypeError):
    """Configuration value does not fit its declared type; carries the key path."""
    def __init__(self, message: str, path: KeyPath = ()):
        self.path = path
        where = ".".join(path)
        super().__init__(f"{where}: {message}" if where else message)


def build_typed(cls: t.Type[_T], data: t.Any) -> _T:
    """Instance of the dataclass *cls* built from raw YAML data."""
    return t.cast(_T, _to_class(cls, data, ()))


def coerce(value: t.Any, hint: t.Any, path: KeyPath) -> t.Any:
    """Check/convert *value* against a type hint, descending into containers."""
    if hint is t.Any:
        return value

    origin = t.get_origin(hint)
    if origin is t.Union or origin is UnionType:
        return _to_union(value, t.get_args(hint), path)
    if origin is t.Literal:
        choices = t.get_args(hint)
        if value in choices:
            return value
        raise ConfigCoerceError(f"must be one of {list(choices)!r}, got {value!r}", path)
    if origin is list:
        return _to_list(value, t.get_args(hint), path)
    if origin is dict:
        return _to_dict(value, t.get_args(hint), path)

    if hint in _SCALARS:
        return _to_scalar(value, hint, path)
    if isinstance(hint, type):
        return _to_class(hint, value, path)
    return value


# ---- scalars ----

def _is_number(value: t.Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# YAML already produces the right scalar types, nothing is converted
_SCALARS: t.Dict[type, t.Callable[[t.Any], bool]] = {
    bool: lambda v: isinstance(v, bool),
    int: lambda v: isinstance(v, int) and not isinstance(v, bool),
    float: _is_number,
    str: lambda v: isinstance(v, str),
}


def _to_scalar(value: t.Any, hint: type, path: KeyPath) -> t.Any:
    if not _SCALARS[hint](value):
        raise ConfigCoerceError(f"expected {hint.__name__}, got {type(value).__name__}", path)
    return float(value) if hint is float else value


# ---- unions and containers ----

def _to_union(value: t.Any, options: t.Tuple[t.Any, ...], path: KeyPath) -> t.Any:
    if value is None:
        if type(None) in options:
            return None
        raise ConfigCoerceError("value must not be empty", path)

    errors: t.List[ConfigCoerceError] = []
    for option in options:
        if option is type(None):
            continue
        try:
            return coerce(value, option, path)
        except ConfigCoerceError as e:
            errors.append(e)
    # a single non-None alternative keeps its own message
    if len(errors) == 1:
        raise errors[0]
    raise ConfigCoerceError(f"no alternative accepts {type(value).__name__} {value!r}", path)


def _to_list(value: t.Any, args: t.Tuple[t.Any, ...], path: KeyPath) -> t.List[t.Any]:
    if not isinstance(value, list):
        raise ConfigCoerceError(f"expected a list, got {type(value).__name__}", path)
    item = args[0] if args else t.Any
    return [coerce(v, item, (*path, str(i))) for i, v in enumerate(value)]


def _to_dict(value: t.Any, args: t.Tuple[t.Any, ...], path: KeyPath) -> t.Dict[t.Any, t.Any]:
    if not isinstance(value, dict):
        raise ConfigCoerceError(f"expected a mapping, got {type(value).__name__}", path)
    key_t, val_t = args or (t.Any, t.Any)
    return {
        coerce(k, key_t, (*path, str(k))): coerce(v, val_t, (*path, str(k)))
        for k, v in value.items()
    }


# ---- classes ----

def _to_class(cls: type, data: t.Any, path: KeyPath) -> t.Any:
    if isinstance(data, cls):
        return data
    if dataclasses.is_dataclass(cls):
        _require_mapping(cls, data, path)
        return _to_dataclass(cls, data, path)
    raise ConfigCoerceError(f"cannot build {cls.__name__} from {type(data).__name__}", path)


def _require_mapping(cls: type, data: t.Any, path: KeyPath) -> None:
    if not isinstance(data, dict):
        raise ConfigCoerceError(f"expected mapping for {cls.__name__}, got {type(data).__name__}", path)


def _to_dataclass(cls: type, data: t.Dict[str, t.Any], path: KeyPath) -> t.Any:
    """Keys absent from *data* keep the dataclass defaults."""
    declared = {f.name: f for f in dataclasses.fields(cls)}
    unknown = sorted(set(data) - set(declared))
    if unknown:
        raise ConfigCoerceError(f"unexpected keys: {unknown!r}", path)

    hints = t.get_type_hints(cls)
    kwargs: t.Dict[str, t.Any] = {}
    for name, f in declared.items():
        if name in data:
            kwargs[name] = coerce(data[name], hints[name], (*path, name))
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            raise ConfigCoerceError("required field missing", (*path, name))
    _LOG.debug("config: %s at %s", cls.__name__, ".".join(path) or "<root>")
    return cls(**kwargs)


__all__ = ["ConfigCoerceError", "build_typed", "coerce"]
