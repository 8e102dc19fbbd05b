"""Tests for select_items and DatasetItem."""

from memorybench.dataset.domain.item import DatasetItem
from memorybench.dataset.domain.selection import select_items


def _make_item(item_id: str, category: str | None) -> DatasetItem:
    return DatasetItem(item_id=item_id, question="Q?", answer="A", category=category)


_ITEMS = [
    _make_item("1", "temporal"),
    _make_item("2", "multi-hop"),
    _make_item("3", "temporal"),
    _make_item("4", None),
]


class TestSelectItems:
    def test_no_filter_keeps_everything(self) -> None:
        assert select_items(_ITEMS, limit=None, categories=[]) == _ITEMS

    def test_category_filter_keeps_order(self) -> None:
        selected = select_items(_ITEMS, limit=None, categories=["temporal"])

        assert [item.item_id for item in selected] == ["1", "3"]

    def test_limit_applies_after_filter(self) -> None:
        selected = select_items(_ITEMS, limit=1, categories=["temporal", "multi-hop"])

        assert [item.item_id for item in selected] == ["1"]

    def test_limit_larger_than_dataset(self) -> None:
        assert len(select_items(_ITEMS, limit=10, categories=[])) == 4


class TestDatasetItem:
    def test_container_key_defaults_to_item_id(self) -> None:
        assert _make_item("q1", None).container_key == "q1"

    def test_container_key_uses_container_id(self) -> None:
        item = DatasetItem(item_id="conv-26-q0", question="Q?", answer="A", container_id="conv-26")

        assert item.container_key == "conv-26"
