"""Tests for the row selection tracker."""

from unittest.mock import Mock

from recordtable import SelectionTracker


def _page(start, count):
    return [{"id": i, "name": f"row {i}"} for i in range(start, start + count)]


class TestPositionalSelection:
    """Default mode: selection keyed by page position."""

    def test_toggle_adds_and_removes(self):
        callback = Mock()
        tracker = SelectionTracker(on_change=callback)
        page = _page(0, 5)
        tracker.bind_page(page)

        tracker.toggle(1, True)
        tracker.toggle(3, True)
        tracker.toggle(1, False)

        assert tracker.positions == frozenset({3})
        assert callback.call_count == 3
        callback.assert_called_with([page[3]])

    def test_select_all_and_clear(self):
        callback = Mock()
        tracker = SelectionTracker(on_change=callback)
        page = _page(0, 4)
        tracker.bind_page(page)

        selected = tracker.select_all(True)
        assert selected == page
        assert tracker.positions == frozenset(range(4))
        assert tracker.all_selected()

        selected = tracker.select_all(False)
        assert selected == []
        assert len(tracker) == 0
        callback.assert_called_with([])

    def test_select_all_with_explicit_page_size(self):
        tracker = SelectionTracker()
        tracker.bind_page(_page(0, 10))

        tracker.select_all(True, current_page_size=3)

        assert tracker.positions == frozenset({0, 1, 2})
        assert not tracker.all_selected()

    def test_derive_skips_stale_positions(self):
        tracker = SelectionTracker()
        tracker.bind_page(_page(0, 10))
        tracker.toggle(2, True)
        tracker.toggle(8, True)

        short_page = _page(100, 5)

        assert tracker.derive(short_page) == [short_page[2]]

    def test_stale_selection_follows_new_page(self):
        """Positions stay after a page change and now map to the new page's rows."""
        callback = Mock()
        tracker = SelectionTracker(on_change=callback)
        page_one = _page(0, 10)
        page_two = _page(10, 10)
        tracker.bind_page(page_one)
        tracker.select_all(True)
        callback.assert_called_with(page_one)

        tracker.bind_page(page_two)

        assert tracker.positions == frozenset(range(10))
        assert tracker.derive(page_two) == page_two
        callback.assert_called_with(page_two)

    def test_bind_same_page_does_not_notify(self):
        callback = Mock()
        tracker = SelectionTracker(on_change=callback)
        page = _page(0, 3)
        tracker.bind_page(page)
        tracker.toggle(0, True)

        tracker.bind_page(page)

        assert callback.call_count == 1

    def test_bind_without_selection_does_not_notify(self):
        callback = Mock()
        tracker = SelectionTracker(on_change=callback)

        tracker.bind_page(_page(0, 3))

        callback.assert_not_called()

    def test_all_selected_false_on_empty_page(self):
        tracker = SelectionTracker()
        tracker.bind_page([])
        tracker.select_all(True)

        assert not tracker.all_selected()

    def test_restore_and_snapshot(self):
        callback = Mock()
        tracker = SelectionTracker(on_change=callback)
        page = _page(0, 5)
        tracker.bind_page(page)

        tracker.restore([4, 1])

        assert tracker.snapshot() == [1, 4]
        assert tracker.derive() == [page[1], page[4]]
        callback.assert_not_called()

    def test_clear(self):
        tracker = SelectionTracker()
        tracker.bind_page(_page(0, 3))
        tracker.select_all(True)

        tracker.clear()

        assert tracker.derive() == []


class TestIdentitySelection:
    """Selection keyed by a stable identity field."""

    def test_selection_survives_page_change(self):
        callback = Mock()
        tracker = SelectionTracker(on_change=callback, identity_field="id")
        page_one = _page(0, 5)
        page_two = _page(5, 5)
        tracker.bind_page(page_one)
        tracker.toggle(1, True)

        tracker.bind_page(page_two)

        assert tracker.derive() == [page_one[1]]
        assert tracker.positions == frozenset()
        assert tracker.identities == [1]
        # Selected records did not change, so no extra notification
        assert callback.call_count == 1

    def test_positions_reflect_identities_on_page(self):
        tracker = SelectionTracker(identity_field="id")
        page = _page(0, 5)
        tracker.bind_page(page)
        tracker.toggle(2, True)

        reordered = list(reversed(page))
        tracker.bind_page(reordered)

        assert tracker.positions == frozenset({2})
        assert tracker.is_selected(2)

        tracker.bind_page([page[4], page[2]])
        assert tracker.positions == frozenset({1})

    def test_select_all_replaces_selection_with_page(self):
        tracker = SelectionTracker(identity_field="id")
        tracker.bind_page(_page(0, 3))
        tracker.toggle(0, True)
        page_two = _page(3, 3)
        tracker.bind_page(page_two)

        tracker.select_all(True)

        assert tracker.derive() == page_two
        assert tracker.all_selected()

    def test_deselect_by_position(self):
        tracker = SelectionTracker(identity_field="id")
        page = _page(0, 3)
        tracker.bind_page(page)
        tracker.toggle(0, True)
        tracker.toggle(1, True)

        tracker.toggle(0, False)

        assert tracker.derive() == [page[1]]

    def test_out_of_range_toggle_is_ignored(self):
        callback = Mock()
        tracker = SelectionTracker(on_change=callback, identity_field="id")
        tracker.bind_page(_page(0, 3))

        assert tracker.toggle(7, True) == []
        callback.assert_called_once_with([])

    def test_restore_resolves_against_all_records(self):
        records = _page(0, 20)
        tracker = SelectionTracker(identity_field="id")
        tracker.bind_page(records[:5])

        tracker.restore([12, 3, 99], records=records)

        assert tracker.identities == [12, 3]
        assert tracker.derive() == [records[12], records[3]]
        assert tracker.snapshot() == [12, 3]
