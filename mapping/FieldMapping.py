# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: FieldMapping
# -----------------------------------------------------------------------------
"""
Data-driven mapping of raw source documents onto EmbeddingRecord / ProductRecord.

Each logical field lists the source aliases to try, in order. The first alias
that resolves to a non-empty value which coerces cleanly to the field type wins;
if none does, the field default is used. Dotted aliases walk nested dicts and
lists ("images.0.src"). Adding a schema alias is a table edit only.
"""
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Sequence, Sized, Tuple

import numpy as np

from catalog.ProductRecord import ProductRecord
from embedding.EmbeddingRecord import EmbeddingRecord
from source.DocumentSource import SourceDocument

_MISSING = object()


@dataclass(frozen=True)
class FieldSpec:
    aliases: Tuple[str, ...]
    coerce: Callable[[Any], Any]
    default: Any


def _lookup(data: Mapping[str, Any], alias: str) -> Any:
    # Literal keys win over dotted traversal
    if alias in data:
        return data[alias]

    current: Any = data
    for part in alias.split("."):
        if isinstance(current, Mapping):
            if part not in current:
                return _MISSING
            current = current[part]
        elif isinstance(current, (list, tuple)) and part.isdigit():
            index = int(part)
            if index >= len(current):
                return _MISSING
            current = current[index]
        else:
            return _MISSING
    return current


def _is_empty(value: Any) -> bool:
    if value is None or value is _MISSING:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def to_text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple)):
        raise ValueError("not a scalar")
    return str(value).strip()


def to_non_negative_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("bool is not a price")
    number = float(value)
    if not math.isfinite(number) or number < 0:
        raise ValueError(f"invalid non-negative number: {value!r}")
    return number


def to_non_negative_int(value: Any) -> int:
    number = to_non_negative_float(value)
    if not number.is_integer():
        raise ValueError(f"not an integer: {value!r}")
    return int(number)


def to_vector(value: Any) -> np.ndarray:
    # Firestore arrays arrive as lists; Firestore Vector values are Sequences too
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        raise ValueError("vector must be a sequence of numbers")
    vector = np.asarray(value, dtype=np.float64)
    if vector.ndim != 1 or not np.isfinite(vector).all():
        raise ValueError("vector must be one-dimensional and finite")
    vector.setflags(write=False)
    return vector


def resolve(data: Mapping[str, Any], spec: FieldSpec) -> Any:
    """First alias that is present, non-empty and coercible wins."""
    for alias in spec.aliases:
        raw = _lookup(data, alias)
        if _is_empty(raw):
            continue
        try:
            return spec.coerce(raw)
        except (TypeError, ValueError):
            continue
    return spec.default


EMBEDDING_FIELDS: Dict[str, FieldSpec] = {
    "vector": FieldSpec(("embedding", "vector", "embeddings"), to_vector, ()),
    "source_text": FieldSpec(("text_embedded", "text", "source_text"), to_text, ""),
}

PRODUCT_FIELDS: Dict[str, FieldSpec] = {
    "name": FieldSpec(("name", "nombre", "title", "product_name"), to_text, ""),
    "price": FieldSpec(("price", "precio", "regular_price", "sale_price"), to_non_negative_float, 0.0),
    "sku": FieldSpec(("sku", "codigo", "code"), to_text, ""),
    "stock_quantity": FieldSpec(("stock_quantity", "stock", "quantity", "inventory"), to_non_negative_int, 0),
    "image_url": FieldSpec(("image_url", "image", "imagen", "images.0.src", "images.0"), to_text, ""),
    "description": FieldSpec(("description", "descripcion", "short_description"), to_text, ""),
}


def map_fields(data: Mapping[str, Any], table: Mapping[str, FieldSpec]) -> Dict[str, Any]:
    return {name: resolve(data, spec) for name, spec in table.items()}


def map_embedding(doc: SourceDocument) -> EmbeddingRecord:
    return EmbeddingRecord(id=doc.id, **map_fields(doc.data, EMBEDDING_FIELDS))


def map_product(doc: SourceDocument) -> ProductRecord:
    return ProductRecord(id=doc.id, **map_fields(doc.data, PRODUCT_FIELDS))
