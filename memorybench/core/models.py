"""Shared pydantic configuration for models persisted as camelCase JSON."""

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

# Frozen, serialized with camelCase keys (dump with by_alias=True), and
# constructible from either snake_case field names or camelCase aliases.
CAMEL_FROZEN = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
