"""Category filtering and item limits applied after a dataset is parsed."""

from memorybench.dataset.domain.item import DatasetItem


def select_items(
    items: list[DatasetItem], limit: int | None, categories: list[str]
) -> list[DatasetItem]:
    """Keep items in one of categories (all when empty), then the first limit of them."""
    if categories:
        wanted = set(categories)
        items = [item for item in items if item.category in wanted]
    if limit is not None:
        items = items[:limit]
    return items
