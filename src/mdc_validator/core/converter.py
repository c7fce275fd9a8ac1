from __future__ import annotations

import datetime as dt
import logging
import types
from typing import Any, Callable, Dict, Tuple, Type, Union, get_args, get_origin

from pydantic import BaseModel

from .checks import MSG_MAX, MSG_MIN, format_value
from .schema import Kind
from .validator import Validator

logger = logging.getLogger(__name__)

PYTHON_KIND_MAP: Dict[type, Kind] = {
    str: Kind.STRING,
    int: Kind.NUMBER,
    float: Kind.NUMBER,
    bool: Kind.BOOLEAN,
    dt.date: Kind.DATE,
    dt.datetime: Kind.DATE,
}


class SchemaConverter:
    """Utilities for building validators from other schema formats."""

    @staticmethod
    def from_pydantic(model: Type[BaseModel], **validator_options: Any) -> Validator:
        """Convert a Pydantic model to a Validator, one field per model field."""
        validator = Validator(**validator_options)

        for field_name, field_info in model.model_fields.items():
            kind, nullable = SchemaConverter._kind_for(field_info.annotation)
            if kind is None:
                logger.debug("Skipping %s.%s: unsupported annotation %r", model.__name__, field_name, field_info.annotation)
                continue

            # Kind values double as the builder method names.
            getattr(validator.field(field_name), kind.value)()
            if field_info.is_required() and not nullable:
                validator.required()

            above: float | int | None = None
            below: float | int | None = None
            for meta in field_info.metadata:
                if getattr(meta, "gt", None) is not None:
                    above = meta.gt
                if getattr(meta, "lt", None) is not None:
                    below = meta.lt

                lower = getattr(meta, "ge", None)
                if lower is None:
                    lower = getattr(meta, "min_length", None)
                if lower is not None:
                    validator.min(lower)

                upper = getattr(meta, "le", None)
                if upper is None:
                    upper = getattr(meta, "max_length", None)
                if upper is not None:
                    validator.max(upper)

                pattern = getattr(meta, "pattern", None)
                if pattern is not None:
                    validator.pattern(pattern)

            if above is not None or below is not None:
                validator.custom(_exclusive_bounds(above, below))

        return validator

    @staticmethod
    def _kind_for(annotation: Any) -> Tuple[Kind | None, bool]:
        """Return the kind for ``annotation`` and whether it admits None."""
        nullable = False
        if get_origin(annotation) in (Union, types.UnionType):
            args = get_args(annotation)
            nullable = type(None) in args
            non_none = [arg for arg in args if arg is not type(None)]
            if len(non_none) != 1:
                return None, nullable
            annotation = non_none[0]
        return PYTHON_KIND_MAP.get(annotation), nullable


def _exclusive_bounds(above: float | int | None, below: float | int | None) -> Callable[[Any], Any]:
    """Custom check for pydantic ``gt``/``lt``, which min/max cannot express."""

    def check(value: Any) -> Any:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return True
        if below is not None and value >= below:
            return MSG_MAX.format(value=format_value(below))
        if above is not None and value <= above:
            return MSG_MIN.format(value=format_value(above))
        return True

    return check
