import pytest

from voidcli.navigation import BlockNavigation


def test_navigation_source_case():
    nav = BlockNavigation()

    nav.set_current_block(1)
    assert nav.current_block_id() == 1

    nav.set_current_block(2)
    assert nav.current_block_id() == 2

    nav.set_current_block(3)
    assert nav.current_block_id() == 3

    assert nav.go_back() == 2
    assert nav.current_block_id() == 2

    assert nav.go_forward() == 3
    assert nav.current_block_id() == 3

    nav.bookmark("test", 2)
    assert nav.go_to_bookmark("test") == 2
    assert nav.current_block_id() == 2


def test_empty_navigation():
    nav = BlockNavigation()
    assert nav.current_block_id() is None
    assert nav.go_back() is None
    assert nav.go_forward() is None


def test_back_stops_at_oldest():
    nav = BlockNavigation()
    nav.set_current_block(1)
    nav.set_current_block(2)
    assert nav.go_back() == 1
    assert nav.go_back() is None
    assert nav.current_block_id() == 1


def test_forward_stops_at_newest():
    nav = BlockNavigation()
    nav.set_current_block(1)
    nav.set_current_block(2)
    assert nav.go_forward() is None
    assert nav.current_block_id() == 2


def test_new_block_drops_forward_history():
    nav = BlockNavigation()
    for block_id in (1, 2, 3):
        nav.set_current_block(block_id)
    nav.go_back()
    nav.go_back()
    nav.set_current_block(9)
    assert nav.go_forward() is None
    assert nav.go_back() == 1


def test_same_block_twice_adds_no_history():
    nav = BlockNavigation()
    nav.set_current_block(5)
    nav.set_current_block(5)
    assert nav.go_back() is None


def test_unknown_bookmark():
    nav = BlockNavigation()
    nav.set_current_block(1)
    assert nav.go_to_bookmark("missing") is None
    assert nav.current_block_id() == 1


def test_bookmarks_view_is_read_only():
    nav = BlockNavigation()
    nav.bookmark("a", 4)
    nav.bookmark("a", 6)
    assert dict(nav.bookmarks()) == {"a": 6}
    with pytest.raises(TypeError):
        nav.bookmarks()["b"] = 1