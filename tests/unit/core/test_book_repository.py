"""Book repository tests against a real in-memory SQLite database."""

import pytest
from sqlmodel import Session, select

from src.catalog.entities.book import BookCreate, BookRepository, BookTable


class TestBookRepositoryCrud:
    """Create/read/update/delete through the repository."""

    def test_create_assigns_id(self, book_repo: BookRepository):
        book = book_repo.create(
            BookCreate(
                title="Dune",
                author="Frank Herbert",
                genre="Science Fiction",
                quantity=3,
                total_quantity=5,
            )
        )

        assert book.id is not None
        assert book.title == "Dune"
        assert book.quantity == 3
        assert book.total_quantity == 5

    def test_get_returns_stored_book(self, book_repo, make_book):
        created = make_book()

        fetched = book_repo.get(created.id)

        assert fetched == created

    def test_get_missing_returns_none(self, book_repo):
        assert book_repo.get(404) is None

    def test_list_all_orders_by_id(self, book_repo, make_book):
        first = make_book(title="Dune")
        second = make_book(title="Emma")

        assert [book.id for book in book_repo.list_all()] == [first.id, second.id]

    def test_list_all_empty(self, book_repo):
        assert book_repo.list_all() == []

    def test_update_overwrites_fields(self, book_repo, make_book):
        book = make_book()

        updated = book_repo.update(book.id, {"title": "Dune Messiah", "quantity": 1})

        assert updated is not None
        assert updated.title == "Dune Messiah"
        assert updated.quantity == 1
        assert updated.total_quantity == book.total_quantity

    def test_update_missing_returns_none(self, book_repo):
        assert book_repo.update(404, {"title": "Nothing"}) is None

    def test_update_rejects_unknown_fields(self, book_repo, make_book):
        book = make_book()

        with pytest.raises(ValueError, match="Cannot update fields"):
            book_repo.update(book.id, {"id": 10})

    def test_delete(self, book_repo, make_book, session: Session):
        book = make_book()

        assert book_repo.delete(book.id) is True
        assert book_repo.get(book.id) is None
        assert session.exec(select(BookTable)).all() == []

    def test_delete_missing(self, book_repo):
        assert book_repo.delete(404) is False


class TestBookRepositorySearch:
    """Text-match filters."""

    @pytest.fixture(autouse=True)
    def _catalog(self, make_book):
        make_book(title="Dune", author="Frank Herbert", genre="Science Fiction")
        make_book(title="Children of Dune", author="Frank Herbert", genre="Science Fiction")
        make_book(title="Emma", author="Jane Austen", genre="Classic")
        make_book(title="100% Pure", author="A. N. Other", genre="Cookery")

    def test_title_is_case_insensitive_substring(self, book_repo):
        titles = {book.title for book in book_repo.search_title("dUnE")}

        assert titles == {"Dune", "Children of Dune"}

    def test_author_is_case_insensitive_substring(self, book_repo):
        books = book_repo.search_author("austen")

        assert [book.title for book in books] == ["Emma"]

    def test_genre_is_case_insensitive_exact(self, book_repo):
        assert len(book_repo.search_genre("science fiction")) == 2
        assert book_repo.search_genre("science") == []

    def test_like_wildcards_are_literal(self, book_repo):
        assert [book.title for book in book_repo.search_title("0%")] == ["100% Pure"]
        assert book_repo.search_title("_") == []

    def test_no_match(self, book_repo):
        assert book_repo.search_title("Ulysses") == []


class TestAdjustQuantity:
    """Guarded quantity updates."""

    def test_decrement(self, book_repo, make_book):
        book = make_book(quantity=3, total_quantity=5)

        updated = book_repo.adjust_quantity(book.id, -1)

        assert updated.quantity == 2
        assert book_repo.get(book.id).quantity == 2

    def test_increment(self, book_repo, make_book):
        book = make_book(quantity=3, total_quantity=5)

        updated = book_repo.adjust_quantity(book.id, 1)

        assert updated.quantity == 4

    def test_decrement_stops_at_zero(self, book_repo, make_book):
        book = make_book(quantity=0, total_quantity=5)

        assert book_repo.adjust_quantity(book.id, -1) is None
        assert book_repo.get(book.id).quantity == 0

    def test_increment_stops_at_total(self, book_repo, make_book):
        book = make_book(quantity=5, total_quantity=5)

        assert book_repo.adjust_quantity(book.id, 1) is None
        assert book_repo.get(book.id).quantity == 5

    def test_missing_book(self, book_repo):
        assert book_repo.adjust_quantity(404, -1) is None


class TestNonAsciiCaseFolding:
    """Accented capitals fold the same way in the query and the column."""

    @pytest.fixture(autouse=True)
    def _shelf(self, make_book):
        make_book(title="Émile", author="Ørsted Ålund", genre="Éducation")
        make_book(title="Dune", author="Frank Herbert", genre="Science Fiction")

    @pytest.mark.parametrize("fragment", ["Émile", "émile", "ÉMILE", "MIL"])
    def test_title(self, book_repo, fragment):
        assert [book.title for book in book_repo.search_title(fragment)] == ["Émile"]

    @pytest.mark.parametrize("fragment", ["Ørsted", "ørsted ålund", "ÅLUND"])
    def test_author(self, book_repo, fragment):
        assert [book.title for book in book_repo.search_author(fragment)] == ["Émile"]

    @pytest.mark.parametrize("genre", ["Éducation", "éducation", "ÉDUCATION"])
    def test_genre(self, book_repo, genre):
        assert [book.title for book in book_repo.search_genre(genre)] == ["Émile"]
