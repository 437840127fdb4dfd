import pytest

from library_tracker import inventory
from library_tracker.book import Book
from library_tracker.catalog import Catalog, default_catalog
from library_tracker.errors import AllCopiesPresentError, NoCopiesAvailableError, NotFoundError
from library_tracker.inventory import SelectionMethod, SelectionStatus


@pytest.fixture
def catalog():
    return Catalog([
        Book("B001", "1984", "George Orwell", 3, 3),
        Book("B002", "Pride and Prejudice", "Jane Austen", 2, 0),
        Book("B003", "To Kill a Mockingbird", "Harper Lee", 4, 1),
        Book("B004", "The Great Gatsby", "F. Scott Fitzgerald", 2, 2),
    ])


def test_list_available_and_borrowed_keep_catalog_order(catalog):
    assert [b.id for b in inventory.list_available(catalog)] == ["B001", "B003", "B004"]
    assert [b.id for b in inventory.list_borrowed(catalog)] == ["B002", "B003"]
    assert inventory.available_indices(catalog) == [0, 2, 3]
    assert inventory.borrowed_indices(catalog) == [1, 2]


def test_borrowed_count_is_derived(catalog):
    assert [b.borrowed for b in catalog] == [0, 2, 3, 0]


def test_borrow_decrements_and_returns_book(catalog):
    book = inventory.borrow(catalog, "B001")
    assert book is catalog[0]
    assert book.copies_available == 2


def test_borrow_matches_id_case_insensitively(catalog):
    assert inventory.borrow(catalog, "b004").id == "B004"


def test_borrow_with_no_copies_fails_and_leaves_catalog_unchanged(catalog):
    before = catalog.to_dict()
    with pytest.raises(NoCopiesAvailableError):
        inventory.borrow(catalog, "B002")
    assert catalog.to_dict() == before


def test_return_with_all_copies_present_fails_and_leaves_catalog_unchanged(catalog):
    before = catalog.to_dict()
    with pytest.raises(AllCopiesPresentError):
        inventory.return_book(catalog, "B001")
    assert catalog.to_dict() == before


def test_unknown_id_raises_not_found(catalog):
    before = catalog.to_dict()
    with pytest.raises(NotFoundError):
        inventory.borrow(catalog, "B999")
    with pytest.raises(LookupError):
        inventory.return_book(catalog, "B999")
    assert catalog.to_dict() == before


def test_borrow_then_return_restores_count(catalog):
    inventory.borrow(catalog, "B003")
    assert catalog[2].copies_available == 0
    inventory.return_book(catalog, "B003")
    assert catalog[2].copies_available == 1


def test_counts_stay_in_range_across_many_operations(catalog):
    for _ in range(10):
        for book_id in ("B001", "B002", "B003", "B004"):
            for op in (inventory.borrow, inventory.return_book, inventory.borrow):
                try:
                    op(catalog, book_id)
                except (NoCopiesAvailableError, AllCopiesPresentError):
                    pass
                for book in catalog:
                    assert 0 <= book.copies_available <= book.copies_total


def test_exhausting_copies_scenario():
    catalog = default_catalog()
    for expected in (2, 1, 0):
        assert inventory.borrow(catalog, "B001").copies_available == expected
    with pytest.raises(NoCopiesAvailableError):
        inventory.borrow(catalog, "B001")
    assert catalog[0].copies_available == 0


# ------------------------- Selection ------------------------- #
def test_resolve_by_position(catalog):
    candidates = [0, 2, 3]
    selection = inventory.resolve_selection(catalog, candidates, "2")
    assert selection.selected
    assert selection.method is SelectionMethod.POSITION
    assert selection.index == 2


@pytest.mark.parametrize("token", ["0", "4", "99", "00", "+4", "9" * 5000, "0" * 5000 + "9"])
def test_resolve_position_out_of_range(catalog, token):
    selection = inventory.resolve_selection(catalog, [0, 2, 3], token)
    assert selection.status is SelectionStatus.NOT_FOUND
    assert selection.method is SelectionMethod.POSITION
    assert selection.index is None


@pytest.mark.parametrize("token", ["B004", "b004", " b004 "])
def test_resolve_by_identifier_any_case(catalog, token):
    selection = inventory.resolve_selection(catalog, [0, 2, 3], token)
    assert selection.selected
    assert selection.method is SelectionMethod.IDENTIFIER
    assert selection.index == 3


def test_resolve_identifier_outside_candidates_is_not_found(catalog):
    selection = inventory.resolve_selection(catalog, [0, 2, 3], "B002")
    assert selection.status is SelectionStatus.NOT_FOUND
    assert selection.method is SelectionMethod.IDENTIFIER


@pytest.mark.parametrize("token", ["", "   ", None, "q", "Q"])
def test_resolve_empty_or_quit_cancels(catalog, token):
    selection = inventory.resolve_selection(catalog, [0, 2, 3], token)
    assert selection.cancelled
    assert not selection.selected


def test_numeric_token_is_tried_before_identifier():
    # A book whose id looks like a position
    catalog = Catalog([Book("2", "Numbered", "Someone", 1), Book("1", "Other", "Someone", 1)])
    selection = inventory.resolve_selection(catalog, [0, 1], "2")
    assert selection.index == 1
    assert selection.method is SelectionMethod.POSITION


def test_duplicate_ids_match_first_occurrence():
    catalog = Catalog([Book("B001", "First", "A", 1), Book("b001", "Second", "B", 1)])
    assert inventory.resolve_selection(catalog, [0, 1], "B001").index == 0
    assert inventory.find_book(catalog, "B001").title == "First"


@pytest.mark.parametrize("token", ["+2", "02", "+002"])
def test_position_accepts_plus_sign_and_leading_zeros(catalog, token):
    # Same forms an unsigned integer parse accepts
    selection = inventory.resolve_selection(catalog, [0, 2, 3], token)
    assert selection.method is SelectionMethod.POSITION
    assert selection.index == 2


@pytest.mark.parametrize("token", ["+", "-1", "++2"])
def test_signed_or_bare_sign_tokens_take_identifier_path(catalog, token):
    selection = inventory.resolve_selection(catalog, [0, 2, 3], token)
    assert selection.status is SelectionStatus.NOT_FOUND
    assert selection.method is SelectionMethod.IDENTIFIER


def test_copy_helpers_act_on_the_given_book():
    catalog = Catalog([Book("B001", "First", "A", 1, 0), Book("b001", "Second", "B", 1, 1)])

    inventory.borrow_copy(catalog[1])
    assert [b.copies_available for b in catalog] == [0, 0]

    inventory.return_copy(catalog[1])
    assert [b.copies_available for b in catalog] == [0, 1]
    with pytest.raises(AllCopiesPresentError):
        inventory.return_copy(catalog[1])
