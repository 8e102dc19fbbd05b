"""Container tags and ingest units — how dataset items map onto provider namespaces."""

from dataclasses import dataclass

from memorybench.dataset.domain.item import DatasetItem, SourceDocument


def container_tag(container_key: str, run_id: str) -> str:
    """Scope a dataset unit to one run: '{container_key}-{run_id}'."""
    return f"{container_key}-{run_id}"


@dataclass(frozen=True)
class IngestUnit:
    """The documents ingested once into one container.

    Items that share a container key (several questions about one
    conversation) share a unit; its documents come from the first such item.
    """

    container_key: str
    container_tag: str
    documents: list[SourceDocument]
    item_ids: list[str]


def group_ingest_units(items: list[DatasetItem], run_id: str) -> list[IngestUnit]:
    """Group items by container key, in the order each key first appears."""
    units: dict[str, IngestUnit] = {}
    for item in items:
        key = item.container_key
        unit = units.get(key)
        if unit is None:
            units[key] = IngestUnit(
                container_key=key,
                container_tag=container_tag(key, run_id),
                documents=list(item.documents),
                item_ids=[item.item_id],
            )
        else:
            unit.item_ids.append(item.item_id)
    return list(units.values())
