# ndvision Filters - Base Classes
"""
Base classes for the filter system.

A filter is a dataclass whose fields are its parameters. Filters work on
numpy arrays of shape (rows, cols, channels) and can be written to and read
from dicts, JSON and a compact text form::

    'blur 5'                     positional args in field order
    'box 3 padding=none'         keyword args
    'canny(lower=0.2,upper=0.6)' legacy call syntax

Usage:
    from ndvision.filters import Filter, FilterContext

    edges = Filter.parse('canny 0.2 0.6')
    ctx = FilterContext()
    mask = edges(image, ctx)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import ChainMap
from dataclasses import MISSING, dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar
import json
import re

import numpy as np


@dataclass
class FilterContext:
    """Key/value store shared by the filters of a pipeline.

    Filters publish intermediate results here, e.g. the threshold an Otsu
    filter computed. A branch sees everything its parent holds, values set on
    the branch stay local to it.
    """

    data: dict[str, Any] = field(default_factory=dict)
    _parent: FilterContext | None = field(default=None, repr=False)

    def _chain(self) -> ChainMap:
        maps = [self.data]
        parent = self._parent
        while parent is not None:
            maps.append(parent.data)
            parent = parent._parent
        return ChainMap(*maps)

    def __getitem__(self, key: str) -> Any:
        return self._chain()[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.data[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._chain()

    def get(self, key: str, default: Any = None) -> Any:
        return self._chain().get(key, default)

    def branch(self, name: str | None = None) -> FilterContext:
        """Child context reading through to this one."""
        child = FilterContext(_parent=self)
        if name:
            child['_branch'] = name
        return child

    def to_dict(self) -> dict[str, Any]:
        """All visible values, local ones taking precedence."""
        return dict(self._chain())

    def copy(self) -> FilterContext:
        """Shallow, detached copy of the local values."""
        return FilterContext(data=dict(self.data))


# Class name (and its lowercase form) -> filter class
FILTER_REGISTRY: dict[str, type[Filter]] = {}
# Alias -> (filter class, default parameters)
FILTER_ALIASES: dict[str, tuple[type[Filter], dict[str, Any]]] = {}


def register_filter(cls: type[Filter]) -> type[Filter]:
    """Class decorator making a filter available to parsing and from_dict."""
    FILTER_REGISTRY[cls.__name__] = cls
    FILTER_REGISTRY[cls.__name__.lower()] = cls
    return cls


def register_alias(alias: str, cls: type[Filter], **defaults: Any) -> None:
    """Register an alternative name for a filter.

    Keyword arguments become parameter defaults of the alias, so
    ``register_alias('laplacian8', Laplacian, diagonal=True)`` makes
    ``'laplacian8'`` parse to ``Laplacian(diagonal=True)``.
    """
    FILTER_ALIASES[alias.lower()] = (cls, defaults)


def _resolve(name: str) -> tuple[type[Filter], dict[str, Any]]:
    """Filter class and preset parameters for a name or alias."""
    key = name.lower()
    if key in FILTER_ALIASES:
        filter_cls, defaults = FILTER_ALIASES[key]
        return filter_cls, dict(defaults)
    if key in FILTER_REGISTRY:
        return FILTER_REGISTRY[key], {}
    raise ValueError(f"Unknown filter: {name}")


def _parameter_names(filter_cls: type[Filter]) -> list[str]:
    return [f.name for f in fields(filter_cls) if not f.name.startswith('_')]


@dataclass
class Filter(ABC):
    """Base class for all filters.

    Subclasses are dataclasses implementing :meth:`apply`::

        @register_filter
        @dataclass
        class Invert(Filter):
            def apply(self, image, context=None):
                return 1.0 - image
    """

    # Parameter set by a bare positional value in the legacy call syntax
    _primary_param: ClassVar[str | None] = None

    @abstractmethod
    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        """Process ``image`` and return the result.

        :param image: Image data of shape (rows, cols, channels).
        :param context: Shared pipeline context, filters may read and write it.
        """

    def __call__(
        self,
        image: np.ndarray | list[np.ndarray],
        context: FilterContext | None = None,
    ) -> np.ndarray | list[np.ndarray]:
        """Apply the filter to an image or to each image of a list."""
        if isinstance(image, list):
            return [self.apply(single, context) for single in image]
        return self.apply(image, context)

    @property
    def type(self) -> str:
        """Name written to the 'type' key when serialized."""
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        data = {name: _plain(getattr(self, name)) for name in _parameter_names(type(self))}
        data['type'] = self.type
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Filter:
        """Create a filter from :meth:`to_dict` output.

        The 'type' key selects the class, it defaults to the class this is
        called on. Filters overriding from_dict (pipelines) handle their own
        payload.
        """
        params = dict(data)
        type_name = params.pop('type', cls.__name__)
        filter_cls = FILTER_REGISTRY.get(type_name) or FILTER_REGISTRY.get(type_name.lower())
        if filter_cls is None:
            raise ValueError(f"Unknown filter type: {type_name}")
        if filter_cls.from_dict.__func__ is not Filter.from_dict.__func__:
            return filter_cls.from_dict(params)
        return filter_cls(**params)

    @classmethod
    def from_json(cls, json_str: str) -> Filter:
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def parse(cls, text: str) -> Filter:
        """Create a filter from its text form.

        Compact form, positional values fill parameters in field order::

            'blur 5'           -> GaussianBlur(size=5)
            'canny 0.2 0.6'    -> Canny(lower=0.2, upper=0.6)
            'sum 5'            -> BoxBlur(size=5, normalise=False)

        Legacy call form, a bare value sets the primary parameter::

            'blur(5)'
            'canny(lower=0.2,upper=0.6)'

        :raises ValueError: For unknown names or surplus positional values.
        """
        text = text.strip()
        call = re.fullmatch(r'(\w+)\(([^)]*)\)', text)
        if call:
            return cls._parse_legacy(call.group(1), call.group(2))

        tokens = _tokenize(text)
        if not tokens:
            raise ValueError(f"Invalid filter format: {text!r}")

        filter_cls, kwargs = _resolve(tokens[0])
        positional = []
        for token in tokens[1:]:
            key, sep, value = token.partition('=')
            if sep:
                kwargs[key.strip()] = _parse_value(value)
            else:
                positional.append(_parse_value(token))

        return filter_cls(**cls._map_positional_args(filter_cls, positional, kwargs))

    @classmethod
    def _parse_legacy(cls, name: str, args: str) -> Filter:
        filter_cls, kwargs = _resolve(name)
        for index, arg in enumerate(a.strip() for a in args.split(',')):
            if not arg:
                continue
            key, sep, value = arg.partition('=')
            if sep:
                kwargs[key.strip()] = _parse_value(value)
            elif index == 0 and filter_cls._primary_param:
                kwargs[filter_cls._primary_param] = _parse_value(arg)
            else:
                raise ValueError(f"Positional arg not supported for {name}: {arg}")
        return filter_cls(**kwargs)

    @classmethod
    def _map_positional_args(
        cls,
        filter_cls: type[Filter],
        positional: list[Any],
        kwargs: dict[str, Any],
    ) -> dict[str, Any]:
        """Assign positional values to parameters in field order.

        Explicit keyword arguments win over positional values.
        """
        names = _parameter_names(filter_cls)
        if len(positional) > len(names):
            raise ValueError(
                f"Too many positional args for {filter_cls.__name__}: "
                f"got {len(positional)}, max {len(names)}"
            )
        for name, value in zip(names, positional):
            kwargs.setdefault(name, value)
        return kwargs

    def to_string(self) -> str:
        """Compact text form, listing only parameters that differ from defaults.

        Example: ``GaussianBlur(size=7).to_string() == 'gaussianblur size=7'``
        """
        parts = [self.type.lower()]
        for f in fields(self):
            if f.name.startswith('_'):
                continue
            value = getattr(self, f.name)
            if f.default is not MISSING and value == f.default:
                continue
            parts.append(f"{f.name}={_format_value(value)}")
        return ' '.join(parts)


def _plain(value: Any) -> Any:
    """JSON friendly form of a parameter value."""
    if isinstance(value, Enum):
        return value.value if isinstance(value.value, str) else value.name.lower()
    return value


def _format_value(value: Any) -> str:
    value = _plain(value)
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, str) and re.search(r"[\s=]", value):
        return f"'{value}'"
    return str(value)


_INT = re.compile(r'[+-]?\d+')
_QUOTED = re.compile(r"""(['"])(.*)\1""")


def _parse_value(text: str) -> int | float | bool | str:
    """Convert a text token to bool, int, float or str.

    Quotes are stripped and force a string: ``'5'`` stays ``'5'``.
    """
    text = text.strip()
    quoted = _QUOTED.fullmatch(text)
    if quoted:
        return quoted.group(2)
    if text.lower() in ('true', 'false'):
        return text.lower() == 'true'
    if _INT.fullmatch(text):
        return int(text)
    try:
        return float(text)
    except ValueError:
        return text


# A token is a run of unquoted non-space characters and quoted sections
_TOKEN = re.compile(r"""(?:[^\s'"]+|'[^']*'|"[^"]*")+""")


def _tokenize(text: str) -> list[str]:
    """Split on whitespace outside of quotes.

    ``"box 3 padding='zero'"`` -> ``['box', '3', "padding='zero'"]``
    """
    return _TOKEN.findall(text)
