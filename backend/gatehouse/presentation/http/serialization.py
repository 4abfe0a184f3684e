"""JSON shaping of handler results: camelCase keys and ISO datetimes."""

from dataclasses import asdict, is_dataclass
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic.alias_generators import to_camel

from gatehouse.core.cqrs import PaginatedResult


def to_camel_dict(item: Any, only: set[str] | None = None) -> dict[str, Any]:
    """
    Convert a dataclass result to a camelCase JSON object.

    ``only`` restricts the output to the given camelCase keys; ``id`` is kept.
    """
    data = asdict(item) if is_dataclass(item) else dict(item)
    result = {to_camel(key): value for key, value in data.items()}
    if only:
        result = {key: value for key, value in result.items() if key == "id" or key in only}
    return jsonable_encoder(result)


def paginated(result: PaginatedResult, only: set[str] | None = None) -> dict[str, Any]:
    return {
        "data": [to_camel_dict(item, only) for item in result.data],
        "pagination": {
            "count": result.pagination.count,
            "pageIndex": result.pagination.page_index,
        },
    }
